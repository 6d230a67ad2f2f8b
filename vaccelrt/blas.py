"""BLAS operations dispatched to plugins."""

from __future__ import annotations

import logging
import struct

from .errors import ErrorCode, VaccelError
from .optypes import OpType

_log = logging.getLogger("vaccelrt")

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _scalar(arg, fmt):
    """Read a scalar from an argument holding raw bytes, a sequence or a value."""
    buf = arg.buf
    if isinstance(buf, _BYTES_LIKE):
        return struct.unpack_from(fmt, buf)[0]
    if isinstance(buf, (list, tuple)):
        if not buf:
            raise VaccelError(ErrorCode.EINVAL, "Empty scalar argument")
        return buf[0]
    return buf


def sgemm(session, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc):
    """Single-precision matrix-matrix multiplication through a plugin."""
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug(
        "session:%u Looking for plugin implementing BLAS SGEMM", session.session_id
    )
    plugin_op = session.plugin_op(OpType.BLAS_SGEMM)
    return plugin_op(session, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc)


def sgemm_unpack(session, read, write):
    """Call sgemm with its arguments taken from generic argument lists.

    ``read`` holds m, n, k, alpha, A, B and beta; ``write`` holds C. The
    leading dimensions are the sizes of the A, B and C arguments.
    """
    if len(read) != 7:
        _log.error("Wrong number of read arguments in SGEMM: %d", len(read))
        raise VaccelError(
            ErrorCode.EINVAL, f"Wrong number of read arguments in SGEMM: {len(read)}"
        )
    if len(write) != 1:
        _log.error("Wrong number of write arguments in SGEMM: %d", len(write))
        raise VaccelError(
            ErrorCode.EINVAL,
            f"Wrong number of write arguments in SGEMM: {len(write)}",
        )

    m = _scalar(read[0], "=q")
    n = _scalar(read[1], "=q")
    k = _scalar(read[2], "=q")
    alpha = _scalar(read[3], "=f")
    lda, a = read[4].size, read[4].buf
    ldb, b = read[5].size, read[5].buf
    beta = _scalar(read[6], "=f")
    ldc, c = write[0].size, write[0].buf

    return sgemm(session, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc)