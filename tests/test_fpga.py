import array

import pytest

from vaccelrt import fpga
from vaccelrt.errors import ErrorCode, VaccelError
from vaccelrt.optypes import Arg, OpType
from vaccelrt.plugin import Plugin, PluginInfo, PluginOp, PluginRegistry, PluginType
from vaccelrt.session import Session


def _copy(sess, src, dst, n):
    dst[:n] = src[:n]
    return 0


def _mmult(sess, a, b, c, n):
    c.append(n)
    return 0


def _parallel(sess, a, b, add_out, mult_out, n):
    for i, (x, y) in enumerate(zip(a[:n], b[:n])):
        add_out[i] = x + y
        mult_out[i] = x * y
    return 0


def _vadd(sess, a, b, c, len_a, len_b):
    for i in range(min(len_a, len_b)):
        c[i] = a[i] + b[i]
    return (len_a, len_b)


@pytest.fixture
def session():
    registry = PluginRegistry()
    plugin = Plugin(PluginInfo(name="fake", type=PluginType.FPGA))
    registry.register_plugin(plugin)
    registry.register_functions(
        [
            PluginOp(OpType.F_ARRAYCOPY, _copy, plugin),
            PluginOp(OpType.F_MMULT, _mmult, plugin),
            PluginOp(OpType.F_PARALLEL, _parallel, plugin),
            PluginOp(OpType.F_VECTORADD, _vadd, plugin),
        ]
    )
    sess = Session(registry=registry)
    yield sess
    sess.close()


@pytest.mark.parametrize(
    "call",
    [
        lambda s: fpga.arraycopy(s, [1], [0], 1),
        lambda s: fpga.mmult(s, [1.0], [1.0], [], 1),
        lambda s: fpga.parallel(s, [1.0], [1.0], [0.0], [0.0], 1),
        lambda s: fpga.vector_add(s, [1.0], [1.0], [0.0], 1, 1),
    ],
)
def test_operations_need_session_and_plugin(call):
    with pytest.raises(VaccelError) as info:
        call(None)
    assert info.value.code == ErrorCode.EINVAL
    with Session(registry=PluginRegistry()) as sess:
        with pytest.raises(VaccelError) as info:
            call(sess)
    assert info.value.code == ErrorCode.ENOTSUP


def test_arraycopy_unpack_with_lists(session):
    out = [0, 0, 0]
    fpga.arraycopy_unpack(session, [Arg([7, 8, 9])], [Arg(out)])
    assert out == [7, 8, 9]


def test_arraycopy_unpack_counts_raw_buffer_in_ints(session):
    src = array.array("i", [4, 5, 6, 7])
    dst = array.array("i", [0, 0, 0, 0])
    raw = memoryview(src.tobytes()).cast("i")
    out = memoryview(bytearray(dst.tobytes())).cast("i")
    fpga.arraycopy_unpack(session, [Arg(raw, size=16)], [Arg(out, size=16)])
    assert out.tolist() == src.tolist()


def test_mmult_unpack_passes_element_count(session):
    out = []
    fpga.mmult_unpack(session, [Arg([1.0, 2.0]), Arg([3.0, 4.0])], [Arg(out)])
    assert out == [2]


def test_parallel_unpack(session):
    add_out, mult_out = [0.0, 0.0], [0.0, 0.0]
    fpga.parallel_unpack(
        session, [Arg([1.0, 2.0]), Arg([3.0, 4.0])], [Arg(add_out), Arg(mult_out)]
    )
    assert add_out == [1.0 + 3.0, 2.0 + 4.0]
    assert mult_out == [1.0 * 3.0, 2.0 * 4.0]


def test_vector_add_unpack_returns_plugin_result(session):
    c = [0.0, 0.0, 0.0]
    result = fpga.vector_add_unpack(
        session, [Arg([1.0, 2.0, 3.0]), Arg([0.5, 0.5])], [Arg(c)]
    )
    assert result == (3, 2)
    assert c[:2] == [1.5, 2.5]
    assert c[2] == 0.0


@pytest.mark.parametrize(
    "func,nr_read,nr_write",
    [
        (fpga.arraycopy_unpack, 2, 1),
        (fpga.arraycopy_unpack, 1, 0),
        (fpga.mmult_unpack, 1, 1),
        (fpga.mmult_unpack, 2, 2),
        (fpga.parallel_unpack, 2, 1),
        (fpga.parallel_unpack, 3, 2),
        (fpga.vector_add_unpack, 1, 1),
        (fpga.vector_add_unpack, 2, 2),
    ],
)
def test_unpack_rejects_wrong_counts(session, func, nr_read, nr_write):
    with pytest.raises(VaccelError) as info:
        func(session, [Arg([1.0])] * nr_read, [Arg([0.0])] * nr_write)
    assert info.value.code == ErrorCode.EINVAL