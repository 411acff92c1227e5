"""Structured error types for load/runtime separation."""

from __future__ import annotations


class BSError(Exception):
    """Base class for structured bs-jax errors."""


class BSLoadError(BSError, SyntaxError):
    """A source record could not be turned into a grid cell."""

    def __init__(
        self,
        message: str,
        line: int = 0,
        start: int = 0,
        end: int = 0,
        found: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.start = start
        self.end = end
        self.found = found

    def __str__(self) -> str:
        where = ""
        if self.line:
            where = f" at line {self.line}, columns [{self.start}, {self.end})"
        found = ""
        if self.found is not None:
            found = f"; found {self.found!r}"
        return f"{self.message}{where}{found}"


class BSIOError(BSError):
    """Source file could not be read."""

    def __init__(self, path: str, reason: str = "") -> None:
        super().__init__(f'Could not open file "{path}"' + (f": {reason}" if reason else ""))
        self.path = path


class BSRuntimeError(BSError):
    """Generic fatal failure while the machine is running."""


class BSShapeError(BSRuntimeError):
    """Selection ranks or extents cannot be reconciled."""


class BSTypeError(BSRuntimeError):
    """A cell holds a different variant than the operation requires."""


class BSOutOfBoundsError(BSRuntimeError):
    """Grid access outside [0, width) x [0, height)."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"index ({x}, {y}) is outside the {height}x{width} grid")
        self.x = x
        self.y = y


class BSStackUnderflowError(BSRuntimeError):
    """Pop from an empty selection stack."""


class BSSelectionError(BSRuntimeError):
    """Selection begin/end toggled out of order."""


class BSStepLimitError(BSRuntimeError):
    """Configured step budget exhausted before halt."""
