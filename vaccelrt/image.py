"""Image operations (classification, detection, segmentation, pose, depth)."""

from __future__ import annotations

import logging

from .errors import ErrorCode, VaccelError
from .optypes import OpType, op_type_str

_log = logging.getLogger("vaccelrt")


def _has_content(buf):
    if buf is None:
        return False
    try:
        return len(buf) > 0
    except TypeError:
        return True


def image_op(op_type, session, img, out_text, out_imgname):
    """Run an image operation through the plugin that implements it.

    When ``out_text`` is given and non-empty the plugin is called with
    ``(session, img, out_text, out_imgname)``, otherwise with
    ``(session, img, out_imgname)``. The plugin's result is returned.
    """
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug(
        "session:%u Looking for plugin implementing %s",
        session.session_id,
        op_type_str(op_type),
    )
    plugin_op = session.plugin_op(op_type)
    if _has_content(out_text):
        return plugin_op(session, img, out_text, out_imgname)
    return plugin_op(session, img, out_imgname)


def image_op_unpack(op_type, session, read, nr_read_req, write, nr_write_req):
    """Check the argument counts and call image_op with generic arguments.

    With two write arguments the first one is the output text and the
    second the output image name; with one it is the output image name.
    """
    name = op_type_str(op_type)
    if len(read) != nr_read_req:
        _log.error(
            "Wrong number of read arguments in %s: %d (expected %d)",
            name, len(read), nr_read_req,
        )
        raise VaccelError(
            ErrorCode.EINVAL,
            f"Wrong number of read arguments in {name}: {len(read)} "
            f"(expected {nr_read_req})",
        )
    if len(write) != nr_write_req:
        _log.error(
            "Wrong number of write arguments in %s: %d (expected %d)",
            name, len(write), nr_write_req,
        )
        raise VaccelError(
            ErrorCode.EINVAL,
            f"Wrong number of write arguments in {name}: {len(write)} "
            f"(expected {nr_write_req})",
        )

    img = read[0].buf
    if nr_write_req == 2:
        out_text = write[0].buf if write[0].size else None
        return image_op(op_type, session, img, out_text, write[1].buf)
    return image_op(op_type, session, img, None, write[0].buf)


def classification(session, img, out_text, out_imgname):
    """Classify an image, filling the output text and image name."""
    return image_op(OpType.IMG_CLASS, session, img, out_text, out_imgname)


def classification_unpack(session, read, write):
    return image_op_unpack(OpType.IMG_CLASS, session, read, 1, write, 2)


def detection(session, img, out_imgname):
    """Run object detection on an image."""
    return image_op(OpType.IMG_DETEC, session, img, None, out_imgname)


def detection_unpack(session, read, write):
    return image_op_unpack(OpType.IMG_DETEC, session, read, 1, write, 1)


def segmentation(session, img, out_imgname):
    """Run image segmentation."""
    return image_op(OpType.IMG_SEGME, session, img, None, out_imgname)


def segmentation_unpack(session, read, write):
    return image_op_unpack(OpType.IMG_SEGME, session, read, 1, write, 1)


def pose(session, img, out_imgname):
    """Run pose estimation on an image."""
    return image_op(OpType.IMG_POSE, session, img, None, out_imgname)


def pose_unpack(session, read, write):
    return image_op_unpack(OpType.IMG_POSE, session, read, 1, write, 1)


def depth(session, img, out_imgname):
    """Run depth estimation on an image."""
    return image_op(OpType.IMG_DEPTH, session, img, None, out_imgname)


def depth_unpack(session, read, write):
    return image_op_unpack(OpType.IMG_DEPTH, session, read, 1, write, 1)