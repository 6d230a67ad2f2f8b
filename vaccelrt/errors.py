"""Error codes and the exception raised by the runtime."""

from __future__ import annotations

import errno
import enum


class ErrorCode(enum.IntEnum):
    """Runtime error codes, aligned with the system errno values."""

    OK = 0
    EINVAL = errno.EINVAL
    ENOMEM = errno.ENOMEM
    ENOTSUP = getattr(errno, "ENOTSUP", errno.EOPNOTSUPP)
    EINPROGRESS = errno.EINPROGRESS
    EBUSY = errno.EBUSY
    EEXISTS = errno.EEXIST
    ENOENT = errno.ENOENT
    ELIBBAD = getattr(errno, "ELIBBAD", 80)
    ENODEV = errno.ENODEV
    EIO = errno.EIO
    ESESS = errno.ECONNRESET
    EBACKEND = getattr(errno, "EPROTO", 71)
    ENOEXEC = errno.ENOEXEC
    ENAMETOOLONG = errno.ENAMETOOLONG
    EUSERS = getattr(errno, "EUSERS", 87)
    EPERM = errno.EPERM


class VaccelError(Exception):
    """Raised when a runtime operation fails; carries an ErrorCode."""

    def __init__(self, code, message=""):
        self.code = ErrorCode(code)
        self.message = message
        text = message or self.code.name
        super().__init__(f"[{self.code.name}] {text}")