"""Execution of functions from shared libraries through plugins."""

from __future__ import annotations

import logging
import struct

from .errors import ErrorCode, VaccelError
from .optypes import OpType

_log = logging.getLogger("vaccelrt")

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _text(arg):
    """Read a string argument; raw bytes end at the first NUL."""
    buf = arg.buf
    if isinstance(buf, _BYTES_LIKE):
        return bytes(buf).split(b"\0", 1)[0].decode()
    return str(buf)


def _resource_id(arg):
    buf = arg.buf
    if isinstance(buf, _BYTES_LIKE):
        return struct.unpack_from("=q", buf)[0]
    if isinstance(buf, (list, tuple)):
        if not buf:
            raise VaccelError(ErrorCode.EINVAL, "Empty resource id argument")
        return int(buf[0])
    return int(buf)


def execute(session, library, fn_symbol, read, write):
    """Run ``fn_symbol`` from ``library`` through the plugin implementing exec."""
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug(
        "session:%u Looking for plugin implementing exec", session.session_id
    )
    plugin_op = session.plugin_op(OpType.EXEC)
    return plugin_op(session, library, fn_symbol, list(read), list(write))


def execute_with_resource(session, shared_object, fn_symbol, read, write):
    """Run ``fn_symbol`` from a shared-object resource through a plugin."""
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug(
        "session:%u Looking for plugin implementing exec with resource",
        session.session_id,
    )
    plugin_op = session.plugin_op(OpType.EXEC_WITH_RESOURCE)
    return plugin_op(session, shared_object, fn_symbol, list(read), list(write))


def exec_unpack(session, read, write):
    """Pop library and symbol from ``read`` and run exec with the rest."""
    if len(read) < 2:
        _log.error("Wrong number of read arguments in exec: %d", len(read))
        raise VaccelError(
            ErrorCode.EINVAL, f"Wrong number of read arguments in exec: {len(read)}"
        )
    library = _text(read[0])
    fn_symbol = _text(read[1])
    return execute(session, library, fn_symbol, read[2:], write)


def exec_with_resource_unpack(session, read, write):
    """Pop a resource id and symbol from ``read`` and run exec on its library."""
    if len(read) < 2:
        _log.error("Wrong number of read arguments in exec: %d", len(read))
        raise VaccelError(
            ErrorCode.EINVAL, f"Wrong number of read arguments in exec: {len(read)}"
        )
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")

    ident = _resource_id(read[0])
    try:
        resource = session.resource_by_id(ident)
    except VaccelError as exc:
        _log.error("cannot find resource: %d", int(exc.code))
        raise
    shared_object = resource.data
    if shared_object is None:
        _log.error("resource is empty..")
        raise VaccelError(ErrorCode.EINVAL, "resource is empty")

    library = shared_object.file.path
    fn_symbol = _text(read[1])
    return execute(session, library, fn_symbol, read[2:], write)