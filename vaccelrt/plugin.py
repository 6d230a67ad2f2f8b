"""Plugin descriptions and the registry mapping operations to plugins."""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .errors import ErrorCode, VaccelError
from .optypes import OpType

_log = logging.getLogger("vaccelrt")


class PluginType(enum.IntFlag):
    """Kinds of plugins; a plugin may combine several."""

    CPU = 0x0001
    GPU = 0x0002
    FPGA = 0x0004
    SOFTWARE = 0x0008
    TENSORFLOW = 0x0010
    TORCH = 0x0020
    JETSON = 0x0040
    GENERIC = 0x0080
    DEBUG = 0x0100
    TYPE_MAX = 0x8000
    ALL = 0xFFFF


_NAMED_TYPES = (
    PluginType.CPU,
    PluginType.GPU,
    PluginType.FPGA,
    PluginType.SOFTWARE,
    PluginType.TENSORFLOW,
    PluginType.TORCH,
    PluginType.JETSON,
    PluginType.GENERIC,
    PluginType.DEBUG,
)


def plugin_type_str(plugin_type):
    """Return the space-separated names of the kinds set in a plugin type."""
    bits = int(plugin_type)
    return " ".join(kind.name for kind in _NAMED_TYPES if bits & kind.value)


@dataclass
class PluginInfo:
    """Static description of a plugin and its entry points."""

    name: str
    version: str = ""
    init: Optional[Callable[[], object]] = None
    fini: Optional[Callable[[], object]] = None
    type: PluginType = PluginType(0)
    is_virtio: bool = False
    sess_init: Optional[Callable] = None
    sess_update: Optional[Callable] = None
    sess_free: Optional[Callable] = None
    sess_register: Optional[Callable] = None
    sess_unregister: Optional[Callable] = None
    resource_new: Optional[Callable] = None
    resource_destroy: Optional[Callable] = None


@dataclass(eq=False)
class Plugin:
    """A plugin instance together with the operations it has registered."""

    info: PluginInfo
    ops: List["PluginOp"] = field(default_factory=list)

    @property
    def name(self):
        return self.info.name


@dataclass(eq=False)
class PluginOp:
    """One operation implemented by a plugin."""

    type: OpType
    func: Callable
    owner: Plugin


class PluginRegistry:
    """Holds registered plugins and, per operation type, their implementations."""

    def __init__(self):
        self._plugins: List[Plugin] = []
        self._ops: dict = {}
        self._lock = threading.RLock()

    @property
    def plugins(self):
        """The registered plugins, in registration order."""
        with self._lock:
            return tuple(self._plugins)

    def register_plugin(self, plugin):
        """Add a plugin to the registry."""
        if plugin is None or plugin.info is None or not plugin.info.name:
            raise VaccelError(ErrorCode.EINVAL, "Invalid plugin")
        with self._lock:
            if any(p is plugin for p in self._plugins):
                raise VaccelError(
                    ErrorCode.EEXISTS, f"Plugin {plugin.name} already registered"
                )
            self._plugins.append(plugin)
        _log.debug("Registered plugin %s", plugin.name)

    def unregister_plugin(self, plugin):
        """Remove a plugin and every operation it registered."""
        with self._lock:
            if not any(p is plugin for p in self._plugins):
                raise VaccelError(ErrorCode.ENOENT, "Plugin is not registered")
            self._plugins = [p for p in self._plugins if p is not plugin]
            for op_type, ops in list(self._ops.items()):
                remaining = [op for op in ops if op.owner is not plugin]
                if remaining:
                    self._ops[op_type] = remaining
                else:
                    del self._ops[op_type]
            plugin.ops.clear()
        _log.debug("Unregistered plugin %s", plugin.name)

    def register_function(self, op):
        """Register one operation of an already registered plugin."""
        if op is None or not callable(op.func):
            raise VaccelError(ErrorCode.EINVAL, "Invalid plugin function")
        try:
            op_type = OpType(op.type)
        except ValueError:
            raise VaccelError(
                ErrorCode.EINVAL, f"Invalid operation type: {op.type}"
            ) from None
        if op_type >= OpType.FUNCTIONS_NR:
            raise VaccelError(ErrorCode.EINVAL, f"Invalid operation type: {op.type}")
        with self._lock:
            if not any(p is op.owner for p in self._plugins):
                raise VaccelError(
                    ErrorCode.EINVAL, "Function owner is not a registered plugin"
                )
            op.type = op_type
            op.owner.ops.append(op)
            self._ops.setdefault(op_type, []).append(op)
        _log.debug("Registered function %s from plugin %s", op_type.name, op.owner.name)

    def register_functions(self, ops):
        """Register several operations, stopping at the first failure."""
        for op in ops:
            self.register_function(op)

    def get_op(self, op_type, hint):
        """Return an implementation of op_type, or None if there is none.

        A non-zero hint selects the first implementation whose plugin type
        shares a bit with it; otherwise the first registered one is used.
        """
        with self._lock:
            ops = list(self._ops.get(op_type, ()))
        if not ops:
            return None
        if hint:
            for op in ops:
                if int(op.owner.info.type) & int(hint):
                    return op.func
        return ops[0].func

    def available_plugins(self, op_type):
        """Return the plugins that implement op_type, without repeats."""
        with self._lock:
            ops = list(self._ops.get(op_type, ()))
        owners: List[Plugin] = []
        for op in ops:
            if not any(o is op.owner for o in owners):
                owners.append(op.owner)
        return owners


_DEFAULT_REGISTRY = PluginRegistry()


def default_registry():
    """Return the process-wide plugin registry."""
    return _DEFAULT_REGISTRY