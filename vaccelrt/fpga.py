"""FPGA-style array operations dispatched to plugins."""

from __future__ import annotations

import logging

from .errors import ErrorCode, VaccelError
from .optypes import OpType

_log = logging.getLogger("vaccelrt")

_BYTES_LIKE = (bytes, bytearray, memoryview)
_INT_SIZE = 4
_FLOAT_SIZE = 4


def _count(arg, itemsize):
    """Number of elements in an argument: raw buffers by byte size."""
    if isinstance(arg.buf, _BYTES_LIKE):
        return arg.size // itemsize
    return len(arg.buf)


def _check_counts(name, read, nr_read, write, nr_write):
    if len(read) != nr_read:
        _log.error("Wrong number of read arguments in %s: %d", name, len(read))
        raise VaccelError(
            ErrorCode.EINVAL,
            f"Wrong number of read arguments in {name}: {len(read)}",
        )
    if len(write) != nr_write:
        _log.error("Wrong number of write arguments in %s: %d", name, len(write))
        raise VaccelError(
            ErrorCode.EINVAL,
            f"Wrong number of write arguments in {name}: {len(write)}",
        )


def _lookup(session, op_type, name):
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug(
        "session:%u Looking for plugin implementing %s operation",
        session.session_id,
        name,
    )
    return session.plugin_op(op_type)


def arraycopy(session, array, out_array, len_array):
    """Copy ``len_array`` integers from ``array`` to ``out_array``."""
    plugin_op = _lookup(session, OpType.F_ARRAYCOPY, "fpga_arraycopy")
    return plugin_op(session, array, out_array, len_array)


def arraycopy_unpack(session, read, write):
    """Call arraycopy with one input and one output argument."""
    _check_counts("fpga_arraycopy", read, 1, write, 1)
    array = read[0].buf
    len_array = _count(read[0], _INT_SIZE)
    return arraycopy(session, array, write[0].buf, len_array)


def mmult(session, a, b, c, len_a):
    """Matrix multiplication of ``a`` and ``b`` into ``c``."""
    plugin_op = _lookup(session, OpType.F_MMULT, "fpga_mmult")
    return plugin_op(session, a, b, c, len_a)


def mmult_unpack(session, read, write):
    """Call mmult with two input and one output argument."""
    _check_counts("fpga_mmult", read, 2, write, 1)
    len_a = _count(read[0], _FLOAT_SIZE)
    return mmult(session, read[0].buf, read[1].buf, write[0].buf, len_a)


def parallel(session, a, b, add_output, mult_output, len_a):
    """Element-wise sum and product of ``a`` and ``b``."""
    plugin_op = _lookup(session, OpType.F_PARALLEL, "fpga_parellel")
    return plugin_op(session, a, b, add_output, mult_output, len_a)


def parallel_unpack(session, read, write):
    """Call parallel with two input and two output arguments."""
    _check_counts("fpga_parallel", read, 2, write, 2)
    len_a = _count(read[0], _FLOAT_SIZE)
    return parallel(
        session, read[0].buf, read[1].buf, write[0].buf, write[1].buf, len_a
    )


def vector_add(session, a, b, c, len_a, len_b):
    """Element-wise vector addition of ``a`` and ``b`` into ``c``."""
    plugin_op = _lookup(session, OpType.F_VECTORADD, "fpga_vector_add")
    return plugin_op(session, a, b, c, len_a, len_b)


def vector_add_unpack(session, read, write):
    """Call vector_add with two input and one output argument."""
    _check_counts("fpga_vector_add", read, 2, write, 1)
    len_a = _count(read[0], _FLOAT_SIZE)
    len_b = _count(read[1], _FLOAT_SIZE)
    return vector_add(session, read[0].buf, read[1].buf, write[0].buf, len_a, len_b)