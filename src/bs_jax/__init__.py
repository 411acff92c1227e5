"""bs-jax public API."""

from .cells import Cell, Char, Nil, Number, Op, Operation
from .config import MachineConfig
from .errors import (
    BSError,
    BSIOError,
    BSLoadError,
    BSOutOfBoundsError,
    BSRuntimeError,
    BSSelectionError,
    BSShapeError,
    BSStackUnderflowError,
    BSStepLimitError,
    BSTypeError,
)
from .selection import Selection, SelectionStack, Shape, Vec2, normalize, selection_at, shape_of

try:
    from .grid import Grid
    from .loader import load, load_file
    from .machine import Machine, run_program
except ModuleNotFoundError as exc:
    if exc.name and exc.name.startswith("jax"):
        _jax_import_error = exc

        def load(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for load(). Install runtime deps first."
            ) from _jax_import_error

        def load_file(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for load_file(). Install runtime deps first."
            ) from _jax_import_error

        def run_program(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for run_program(). Install runtime deps first."
            ) from _jax_import_error

        class Grid:  # pragma: no cover - import-time fallback
            def __init__(self, *_args, **_kwargs) -> None:
                raise ModuleNotFoundError(
                    "jax is required for Grid(). Install runtime deps first."
                ) from _jax_import_error

        class Machine:  # pragma: no cover - import-time fallback
            def __init__(self, *_args, **_kwargs) -> None:
                raise ModuleNotFoundError(
                    "jax is required for Machine(). Install runtime deps first."
                ) from _jax_import_error

    else:
        raise

__all__ = [
    "Cell",
    "Char",
    "Nil",
    "Number",
    "Op",
    "Operation",
    "Vec2",
    "Selection",
    "SelectionStack",
    "Shape",
    "normalize",
    "selection_at",
    "shape_of",
    "Grid",
    "load",
    "load_file",
    "Machine",
    "MachineConfig",
    "run_program",
    "BSError",
    "BSIOError",
    "BSLoadError",
    "BSOutOfBoundsError",
    "BSRuntimeError",
    "BSSelectionError",
    "BSShapeError",
    "BSStackUnderflowError",
    "BSStepLimitError",
    "BSTypeError",
]
