"""The MinMax operation dispatched to plugins."""

from __future__ import annotations

import logging
import struct

from .errors import ErrorCode, VaccelError
from .optypes import OpType

_log = logging.getLogger("vaccelrt")

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _scalar(arg, fmt):
    buf = arg.buf
    if isinstance(buf, _BYTES_LIKE):
        return struct.unpack_from(fmt, buf)[0]
    if isinstance(buf, (list, tuple)):
        if not buf:
            raise VaccelError(ErrorCode.EINVAL, "Empty scalar argument")
        return buf[0]
    return buf


def _store(arg, fmt, value):
    """Write a scalar result into an output argument."""
    buf = arg.buf
    if isinstance(buf, (bytearray, memoryview)) and not (
        isinstance(buf, memoryview) and buf.readonly
    ):
        struct.pack_into(fmt, buf, 0, value)
    elif isinstance(buf, list):
        if buf:
            buf[0] = value
        else:
            buf.append(value)
    else:
        arg.buf = value


def minmax(session, indata, ndata, low_threshold, high_threshold, outdata):
    """Run MinMax through a plugin and return its ``(min, max)`` pair.

    The plugin fills ``outdata`` and returns the minimum and maximum.
    """
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug(
        "session:%u Looking for plugin implementing MinMax", session.session_id
    )
    plugin_op = session.plugin_op(OpType.MINMAX)
    low, high = plugin_op(
        session, indata, ndata, low_threshold, high_threshold, outdata
    )
    return low, high


def minmax_unpack(session, read, write):
    """Call minmax from generic arguments and store min and max in ``write``.

    ``read`` holds the data, its count and the two thresholds; ``write``
    holds the output data, the minimum and the maximum.
    """
    if len(read) != 4:
        _log.error("Wrong number of read arguments in MinMax: %d", len(read))
        raise VaccelError(
            ErrorCode.EINVAL,
            f"Wrong number of read arguments in MinMax: {len(read)}",
        )
    if len(write) != 3:
        _log.error("Wrong number of write arguments in MinMax: %d", len(write))
        raise VaccelError(
            ErrorCode.EINVAL,
            f"Wrong number of write arguments in MinMax: {len(write)}",
        )

    indata = read[0].buf
    ndata = _scalar(read[1], "=i")
    low_threshold = _scalar(read[2], "=i")
    high_threshold = _scalar(read[3], "=i")
    _log.info("number of data: %d", ndata)

    low, high = minmax(
        session, indata, ndata, low_threshold, high_threshold, write[0].buf
    )
    _store(write[1], "=d", low)
    _store(write[2], "=d", high)
    return low, high