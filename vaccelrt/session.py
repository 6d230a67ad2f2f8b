"""Sessions, resources and the files that back them."""

from __future__ import annotations

import enum
import logging
import os
import shutil
import tempfile
import threading
from typing import Optional

from .errors import ErrorCode, VaccelError
from .id_pool import IdPool
from .optypes import op_type_str
from .plugin import default_registry

_log = logging.getLogger("vaccelrt")

_MAX_RESOURCES = 2048
_MAX_SESSIONS = 1024


class ResourceType(enum.IntEnum):
    """Kinds of resources a session can hold."""

    TF_MODEL = 0
    TF_SAVED_MODEL = 1
    CAFFE_MODEL = 2
    SHARED_OBJ = 3
    TORCH_MODEL = 4
    TORCH_SAVED_MODEL = 5
    MAX = 6


class Resource:
    """A runtime object with a unique id; ``data`` is the object it wraps."""

    _pool = IdPool(_MAX_RESOURCES)

    def __init__(self, type, data=None):
        rtype = ResourceType(type)
        if rtype >= ResourceType.MAX:
            raise VaccelError(ErrorCode.EINVAL, f"Invalid resource type: {type}")
        ident = Resource._pool.get()
        if not ident:
            raise VaccelError(ErrorCode.EUSERS, "No resource ids left")
        self.id = ident
        self.type = rtype
        self.data = data

    def destroy(self):
        """Give the id back; the resource can no longer be registered."""
        if self.id:
            Resource._pool.release(self.id)
            self.id = 0

    def __repr__(self):
        return f"Resource(id={self.id}, type={self.type.name})"


class VaccelFile:
    """A file known by its path, its contents in memory, or both."""

    def __init__(self, path=None, data=None, path_owned=False):
        self.path: Optional[str] = path
        self.data: Optional[bytes] = bytes(data) if data is not None else None
        self.path_owned = path_owned
        self._owned_dir: Optional[str] = None

    @classmethod
    def from_path(cls, path):
        if not path:
            raise VaccelError(ErrorCode.EINVAL, "Empty file path")
        return cls(path=os.fspath(path))

    @classmethod
    def from_buffer(cls, data, filename="file", persist=False, directory=None,
                    randomize=True):
        """Wrap bytes; with ``persist`` also write them to disk."""
        if not data:
            raise VaccelError(ErrorCode.EINVAL, "Empty file buffer")
        vfile = cls(data=data)
        if persist:
            vfile.persist(directory, filename, randomize)
        return vfile

    @property
    def initialized(self):
        return self.path is not None or self.data is not None

    @property
    def size(self):
        return len(self.data) if self.data is not None else 0

    def persist(self, directory=None, filename="file", randomize=True):
        """Write the in-memory contents to disk and return the new path."""
        if self.data is None:
            raise VaccelError(ErrorCode.EINVAL, "No data to persist")
        if self.path is not None:
            raise VaccelError(ErrorCode.EEXISTS, "File already has a path")
        base = directory or tempfile.gettempdir()
        if randomize:
            target_dir = tempfile.mkdtemp(dir=base)
            self._owned_dir = target_dir
        else:
            target_dir = base
        path = os.path.join(target_dir, filename)
        try:
            with open(path, "xb") as handle:
                handle.write(self.data)
        except FileExistsError:
            raise VaccelError(ErrorCode.EEXISTS, f"{path} exists") from None
        except OSError as exc:
            raise VaccelError(ErrorCode.EIO, str(exc)) from exc
        self.path = path
        self.path_owned = True
        return path

    def read(self):
        """Load the contents from the path and return them."""
        if self.path is None:
            raise VaccelError(ErrorCode.EINVAL, "File has no path")
        try:
            with open(self.path, "rb") as handle:
                self.data = handle.read()
        except FileNotFoundError:
            raise VaccelError(ErrorCode.ENOENT, f"{self.path} not found") from None
        except OSError as exc:
            raise VaccelError(ErrorCode.EIO, str(exc)) from exc
        return self.data

    def destroy(self):
        """Drop the contents and remove the file if this object created it."""
        if self.path_owned and self.path:
            try:
                os.remove(self.path)
            except FileNotFoundError:
                pass
            if self._owned_dir:
                shutil.rmtree(self._owned_dir, ignore_errors=True)
        self.path = None
        self.data = None
        self.path_owned = False
        self._owned_dir = None


class _FileResource:
    """Shared behaviour of resources backed by a single file."""

    resource_type = ResourceType.MAX
    persist_buffers = False
    buffer_filename = "file"

    def __init__(self, file):
        self.file = file
        self.plugin_data = None
        self.resource = Resource(self.resource_type, self)

    @classmethod
    def from_path(cls, path):
        return cls(VaccelFile.from_path(path))

    @classmethod
    def from_buffer(cls, data):
        return cls(
            VaccelFile.from_buffer(
                data, cls.buffer_filename, persist=cls.persist_buffers
            )
        )

    @property
    def id(self):
        return self.resource.id

    @property
    def data(self):
        """The file contents, read from disk when not yet in memory."""
        if self.file.data is None and self.file.path is not None:
            self.file.read()
        return self.file.data

    def destroy(self):
        self.resource.destroy()
        self.file.destroy()


class SharedObject(_FileResource):
    """A shared library handed to the runtime as a resource."""

    resource_type = ResourceType.SHARED_OBJ
    persist_buffers = True
    buffer_filename = "lib.so"


class TfModel(_FileResource):
    """A TensorFlow model held in a single protobuf file."""

    resource_type = ResourceType.TF_MODEL


class _SavedModel:
    resource_type = ResourceType.MAX

    def __init__(self, path=None, model=None):
        self.path = path
        self.model: VaccelFile = model or VaccelFile()
        self.resource: Optional[Resource] = None

    def _has_content(self):
        return bool(self.path) or self.model.initialized

    def register(self):
        """Create the resource for this model."""
        if self.resource is not None:
            raise VaccelError(ErrorCode.EEXISTS, "Model already registered")
        if not self._has_content():
            raise VaccelError(ErrorCode.EINVAL, "Model has no path and no data")
        self.resource = Resource(self.resource_type, self)
        return self.resource

    @property
    def id(self):
        if self.resource is None:
            raise VaccelError(ErrorCode.EINVAL, "Model is not registered")
        return self.resource.id

    def destroy(self):
        if self.resource is not None:
            self.resource.destroy()
            self.resource = None
        self.model.destroy()


class TfSavedModel(_SavedModel):
    """A TensorFlow saved model: model file, checkpoint and variables index."""

    resource_type = ResourceType.TF_SAVED_MODEL

    def __init__(self, path=None, model=None, checkpoint=None, var_index=None):
        super().__init__(path, model)
        self.checkpoint: VaccelFile = checkpoint or VaccelFile()
        self.var_index: VaccelFile = var_index or VaccelFile()
        self.priv = None

    def destroy(self):
        super().destroy()
        self.checkpoint.destroy()
        self.var_index.destroy()


class TorchSavedModel(_SavedModel):
    """A PyTorch saved model."""

    resource_type = ResourceType.TORCH_SAVED_MODEL


def _as_resource(obj):
    if isinstance(obj, Resource):
        return obj
    res = getattr(obj, "resource", None)
    return res if isinstance(res, Resource) else None


class Session:
    """A client session: its id, plugin hint and registered resources."""

    _pool = IdPool(_MAX_SESSIONS)

    def __init__(self, flags=0, registry=None):
        ident = Session._pool.get()
        if not ident:
            raise VaccelError(ErrorCode.EUSERS, "No session ids left")
        self.session_id = ident
        self.hint = int(flags)
        self.registry = registry if registry is not None else default_registry()
        self.priv = None
        self._resources: dict = {}
        self._lock = threading.Lock()
        self.closed = False
        _log.debug("session:%u New session", self.session_id)

    def update(self, flags):
        """Change the plugin preference of the session."""
        self.hint = int(flags)

    def close(self):
        """Drop all resources and give the session id back."""
        if self.closed:
            return
        with self._lock:
            self._resources.clear()
        Session._pool.release(self.session_id)
        self.closed = True
        _log.debug("session:%u Session closed", self.session_id)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def register(self, resource):
        """Register a resource, or an object that owns one, with the session."""
        res = _as_resource(resource)
        if res is None or not res.id:
            raise VaccelError(ErrorCode.EINVAL, "Invalid resource")
        with self._lock:
            if res.id in self._resources:
                raise VaccelError(
                    ErrorCode.EEXISTS,
                    f"Resource {res.id} already registered with session",
                )
            self._resources[res.id] = res
        _log.debug("session:%u Registered resource %d", self.session_id, res.id)

    def unregister(self, resource):
        """Remove a resource from the session."""
        res = _as_resource(resource)
        if res is None:
            raise VaccelError(ErrorCode.EINVAL, "Invalid resource")
        with self._lock:
            if self._resources.get(res.id) is not res:
                raise VaccelError(
                    ErrorCode.ENOENT, "Resource is not registered with session"
                )
            del self._resources[res.id]
        _log.debug("session:%u Unregistered resource %d", self.session_id, res.id)

    def has_resource(self, resource):
        """True if the resource is registered with this session."""
        res = _as_resource(resource)
        if res is None:
            return False
        with self._lock:
            return self._resources.get(res.id) is res

    def resource_by_id(self, ident):
        """Return the registered resource with the given id."""
        with self._lock:
            res = self._resources.get(ident)
        if res is None:
            raise VaccelError(ErrorCode.ENOENT, f"No resource with id {ident}")
        return res

    def plugin_op(self, op_type):
        """Return the implementation chosen for op_type in this session."""
        func = self.registry.get_op(op_type, self.hint)
        if func is None:
            raise VaccelError(
                ErrorCode.ENOTSUP,
                f"No plugin implements {op_type_str(op_type)}",
            )
        return func


def get_plugins(session, op_type):
    """Return the plugins available to a session for op_type."""
    if session is None:
        raise VaccelError(ErrorCode.EINVAL, "Invalid session")
    _log.debug(
        "session:%u Query for plugins implementing %s",
        session.session_id,
        op_type_str(op_type),
    )
    return session.registry.available_plugins(op_type)