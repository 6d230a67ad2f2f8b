"""Operation types and the generic argument container."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from .errors import ErrorCode, VaccelError


class OpType(enum.IntEnum):
    """Operations a plugin can implement, each with a readable label."""

    def __new__(cls, value, label):
        member = int.__new__(cls, value)
        member._value_ = value
        member.label = label
        return member

    NO_OP = 0, "noop"
    BLAS_SGEMM = 1, "sgemm"
    IMG_CLASS = 2, "image classification"
    IMG_DETEC = 3, "image detection"
    IMG_SEGME = 4, "image segmentation"
    IMG_POSE = 5, "image pose estimation"
    IMG_DEPTH = 6, "image depth estimation"
    EXEC = 7, "exec"
    TF_MODEL_NEW = 8, "TensorFlow model create"
    TF_MODEL_DESTROY = 9, "TensorFlow model destroy"
    TF_MODEL_REGISTER = 10, "TensorFlow model register"
    TF_MODEL_UNREGISTER = 11, "TensorFlow model unregister"
    TF_SESSION_LOAD = 12, "TensorFlow session load"
    TF_SESSION_RUN = 13, "TensorFlow session run"
    TF_SESSION_DELETE = 14, "TensorFlow session delete"
    MINMAX = 15, "MinMax"
    F_ARRAYCOPY = 16, "Array copy"
    F_MMULT = 17, "Matrix multiplication"
    F_PARALLEL = 18, "Parallel acceleration"
    F_VECTORADD = 19, "Vector Add"
    EXEC_WITH_RESOURCE = 20, "Exec with resource"
    TORCH_JITLOAD_FORWARD = 21, "Torch jitload_forward function"
    TORCH_SGEMM = 22, "Torch SGEMM"
    OPENCV = 23, "OpenCV Generic"
    FUNCTIONS_NR = 24, "Functions NR"


def op_type_str(op_type):
    """Return the human-readable name of an operation type."""
    index = int(op_type)
    try:
        return OpType(index).label
    except ValueError:
        raise VaccelError(
            ErrorCode.EINVAL, f"Invalid operation type: {index}"
        ) from None


@dataclass
class Arg:
    """A generic operation argument: a buffer and its size in bytes.

    When no size is given it is taken from ``len(buf)``.
    """

    buf: Any
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            try:
                self.size = len(self.buf)
            except TypeError:
                self.size = 0