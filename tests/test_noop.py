import pytest

from vaccelrt.errors import ErrorCode, VaccelError
from vaccelrt.noop import noop, noop_unpack
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
def seen():
    return []


@pytest.fixture
def session(seen):
    def impl(sess):
        seen.append(sess.session_id)
        return 0

    with _session_with({OpType.NO_OP: impl}) as sess:
        yield sess


def test_noop_calls_plugin(session, seen):
    assert noop(session) == 0
    assert seen == [session.session_id]


def test_noop_without_session():
    with pytest.raises(VaccelError) as info:
        noop(None)
    assert info.value.code == ErrorCode.EINVAL


def test_noop_without_plugin():
    with _session_with({}) as sess:
        with pytest.raises(VaccelError) as info:
            noop(sess)
    assert info.value.code == ErrorCode.ENOTSUP


@pytest.mark.parametrize("read, write", [([], []), (None, None), ([], None)])
def test_unpack_accepts_empty(session, seen, read, write):
    assert noop_unpack(session, read, write) == 0
    assert len(seen) == 1


def test_unpack_rejects_read_args(session, seen):
    with pytest.raises(VaccelError) as info:
        noop_unpack(session, [Arg(b"x")], [])
    assert info.value.code == ErrorCode.EINVAL
    assert seen == []


def test_unpack_rejects_write_args(session, seen):
    with pytest.raises(VaccelError) as info:
        noop_unpack(session, [], [Arg(bytearray(1))])
    assert info.value.code == ErrorCode.EINVAL
    assert seen == []