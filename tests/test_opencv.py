import pytest

from vaccelrt.errors import ErrorCode, VaccelError
from vaccelrt.opencv import opencv, opencv_unpack
from vaccelrt.optypes import Arg, OpType
from vaccelrt.plugin import Plugin, PluginInfo, PluginOp, PluginRegistry, PluginType
from vaccelrt.session import Session


def _session_with(ops):
    registry = PluginRegistry()
    plugin = Plugin(PluginInfo(name="test", type=PluginType.DEBUG))
    registry.register_plugin(plugin)
    registry.register_functions(PluginOp(t, f, plugin) for t, f in ops.items())
    return Session(registry=registry)


@pytest.fixture
def session():
    def impl(sess, read, write):
        for arg in write:
            arg.buf[:] = bytes(reversed(read[0].buf))
        return len(read) + len(write)

    with _session_with({OpType.OPENCV: impl}) as sess:
        yield sess


def test_opencv_passes_arguments(session):
    out = Arg(bytearray(3))
    assert opencv(session, [Arg(b"abc")], [out]) == 2
    assert out.buf == bytearray(b"cba")


def test_unpack_forwards_any_count(session):
    outs = [Arg(bytearray(2)), Arg(bytearray(2))]
    assert opencv_unpack(session, [Arg(b"xy"), Arg(b"z")], outs) == 4
    assert [bytes(o.buf) for o in outs] == [b"yx", b"yx"]


def test_opencv_without_session():
    with pytest.raises(VaccelError) as info:
        opencv(None, [], [])
    assert info.value.code == ErrorCode.EINVAL


def test_opencv_without_plugin():
    with _session_with({}) as sess:
        with pytest.raises(VaccelError) as info:
            opencv_unpack(sess, [Arg(b"a")], [])
    assert info.value.code == ErrorCode.ENOTSUP