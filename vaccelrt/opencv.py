"""Generic OpenCV operation dispatched to plugins."""

from __future__ import annotations

import logging

from .errors import ErrorCode, VaccelError
from .optypes import OpType

_log = logging.getLogger("vaccelrt")


def opencv(session, read, write):
    """Pass the read and write arguments to the plugin implementing OpenCV."""
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug(
        "session:%u Looking for plugin implementing the Optical Flow operation",
        session.session_id,
    )
    plugin_op = session.plugin_op(OpType.OPENCV)
    return plugin_op(session, list(read), list(write))


def opencv_unpack(session, read, write):
    """Call opencv with the arguments as given; their count is not checked."""
    return opencv(session, read, write)