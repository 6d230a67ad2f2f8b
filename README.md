# vaccelrt

The core of an acceleration runtime. An application opens a `Session`,
registers the resources it needs and calls operations such as `noop`,
`sgemm`, image classification, `minmax`, FPGA-style array kernels or
execution of a function from a shared library. Every call is handed to
whichever plugin has registered an implementation for that operation type
in a `PluginRegistry`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

- `vaccelrt.errors` — `ErrorCode` (errno-aligned codes such as `EINVAL`,
  `ENOENT`, `ENOTSUP`) and `VaccelError`, the exception every failure raises;
  its `code` attribute holds the `ErrorCode`.
- `vaccelrt.id_pool` — `IdPool`, a thread-safe pool of ids `1..nr_ids`;
  `get()` returns 0 when exhausted, `release(ident)` gives an id back.
- `vaccelrt.optypes` — `OpType`, the operations the runtime knows
  (`op_type_str` gives a readable name), and `Arg`, a buffer with a size used
  by the `*_unpack` functions.
- `vaccelrt.plugin` — `PluginType` flags, `PluginInfo`, `Plugin`, `PluginOp`
  and `PluginRegistry` with `register_plugin`, `unregister_plugin`,
  `register_function`, `register_functions`, `get_op` and
  `available_plugins`. `default_registry()` returns the process-wide
  registry. A non-zero hint makes `get_op` prefer the first implementation
  whose plugin type shares a bit with it.
- `vaccelrt.session` — `Session` (a context manager) with `register`,
  `unregister`, `has_resource`, `resource_by_id`, `plugin_op` and `update`;
  resource types `Resource`, `VaccelFile`, `SharedObject`, `TfModel`,
  `TfSavedModel`, `TorchSavedModel`; and `get_plugins(session, op_type)`.
- Operations, each raising `VaccelError(ENOTSUP)` when no plugin implements
  them, and each with an `*_unpack` form taking lists of `Arg`:
  - `vaccelrt.noop` — `noop`
  - `vaccelrt.blas` — `sgemm`
  - `vaccelrt.minmax` — `minmax` (the plugin returns `(min, max)`)
  - `vaccelrt.image` — `classification`, `detection`, `segmentation`,
    `pose`, `depth`
  - `vaccelrt.fpga` — `arraycopy`, `mmult`, `parallel`, `vector_add`
  - `vaccelrt.execution` — `execute`, `execute_with_resource`
  - `vaccelrt.opencv` — `opencv`
- `vaccelrt.log` — `init_logging(environ)` and `shutdown_logging()`.

## Example

```python
from vaccelrt.noop import noop
from vaccelrt.optypes import OpType
from vaccelrt.plugin import Plugin, PluginInfo, PluginOp, PluginRegistry, PluginType
from vaccelrt.session import Session

registry = PluginRegistry()
plugin = Plugin(PluginInfo(name="echo", type=PluginType.SOFTWARE))
registry.register_plugin(plugin)
registry.register_function(
    PluginOp(OpType.NO_OP, lambda sess: f"noop for {sess.session_id}", plugin)
)

with Session(registry=registry) as session:
    print(noop(session))
```

## Logging

`init_logging(environ)` configures the `vaccelrt` logger from the given
mapping (or `os.environ`): `VACCEL_DEBUG_LEVEL` (1 error, 2 warning, 3 info,
4 debug) selects the enabled levels, and `VACCEL_LOG_FILE` sends output to a
file instead of standard output (`/dev/stdout` and `/dev/stderr` keep it on
the screen). `shutdown_logging()` closes the handlers again.

## What this package does not do

- It ships no backend plugin: no operation does any work until you register
  a plugin that implements it.
- It has no dispatcher that takes an operation code plus argument lists;
  call the `*_unpack` function of the operation you need directly.
- It has no TensorFlow or PyTorch operations (session load/run/delete,
  forward passes, tensors). `TfSavedModel` and `TorchSavedModel` exist only
  as resources that can be registered with a session.
- It has no command-line program.