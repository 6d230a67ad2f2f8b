"""The no-op operation, useful for checking the dispatch path."""

from __future__ import annotations

import logging

from .errors import ErrorCode, VaccelError
from .optypes import OpType

_log = logging.getLogger("vaccelrt")


def noop(session):
    """Call the plugin implementing the no-op operation."""
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug("session:%u Looking for plugin implementing noop", session.session_id)
    plugin_op = session.plugin_op(OpType.NO_OP)
    return plugin_op(session)


def noop_unpack(session, read, write):
    """Call noop; it accepts no read and no write arguments."""
    nr_read = len(read) if read is not None else 0
    nr_write = len(write) if write is not None else 0
    if nr_read:
        _log.error("Wrong number of read arguments in noop: %d", nr_read)
        raise VaccelError(
            ErrorCode.EINVAL, f"Wrong number of read arguments in noop: {nr_read}"
        )
    if nr_write:
        _log.error("Wrong number of write arguments in noop: %d", nr_write)
        raise VaccelError(
            ErrorCode.EINVAL, f"Wrong number of write arguments in noop: {nr_write}"
        )
    return noop(session)