"""Fixed-size grid store backed by a pair of JAX arrays.

Cells are kept as a structure of arrays: an ``int8`` tag plane saying which
variant a cell holds, and an ``int32`` payload plane holding the operation
index, the number, or the character codepoint. Both planes are indexed
row-major as ``[y, x]``. Writes go through functional ``.at[...]`` updates
and replace the stored planes.
"""

from __future__ import annotations

from typing import Final

import jax.numpy as jnp

from .cells import NIL, OPCODES, Cell, Char, Nil, Number, Op, Operation
from .errors import BSOutOfBoundsError, BSTypeError
from .selection import Vec2

TAG_NIL: Final[int] = 0
TAG_OP: Final[int] = 1
TAG_NUMBER: Final[int] = 2
TAG_CHAR: Final[int] = 3

_TAG_NAMES: Final[dict[int, str]] = {
    TAG_NIL: "nil",
    TAG_OP: "operation",
    TAG_NUMBER: "number",
    TAG_CHAR: "character",
}

INT32_MIN: Final[int] = int(jnp.iinfo(jnp.int32).min)
INT32_MAX: Final[int] = int(jnp.iinfo(jnp.int32).max)

_OPCODE_INDEX: Final[dict[Operation, int]] = {op: idx for idx, op in enumerate(OPCODES)}


def _encode(cell: Cell) -> tuple[int, int]:
    if isinstance(cell, Nil):
        return TAG_NIL, 0
    if isinstance(cell, Op):
        return TAG_OP, _OPCODE_INDEX[cell.code]
    if isinstance(cell, Number):
        if not INT32_MIN <= cell.value <= INT32_MAX:
            raise ValueError(f"number {cell.value} does not fit in a 32-bit cell")
        return TAG_NUMBER, cell.value
    if isinstance(cell, Char):
        return TAG_CHAR, cell.codepoint
    raise TypeError(f"unsupported cell type {type(cell).__name__}")


def _decode(tag: int, payload: int) -> Cell:
    if tag == TAG_NIL:
        return NIL
    if tag == TAG_OP:
        return Op(OPCODES[payload])
    if tag == TAG_NUMBER:
        return Number(payload)
    if tag == TAG_CHAR:
        return Char(chr(payload))
    raise ValueError(f"corrupt cell tag {tag}")


class Grid:
    def __init__(self, height: int, width: int) -> None:
        if height <= 0 or width <= 0:
            raise ValueError(f"grid dimensions must be positive, got {height}x{width}")
        self.height = height
        self.width = width
        self._tags = jnp.zeros((height, width), dtype=jnp.int8)
        self._payload = jnp.zeros((height, width), dtype=jnp.int32)

    def __repr__(self) -> str:
        return f"Grid(height={self.height}, width={self.width})"

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    @property
    def tags(self) -> jnp.ndarray:
        return self._tags

    @property
    def payload(self) -> jnp.ndarray:
        return self._payload

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise BSOutOfBoundsError(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> Cell:
        self._check(x, y)
        return _decode(int(self._tags[y, x]), int(self._payload[y, x]))

    def set(self, x: int, y: int, cell: Cell) -> None:
        self._check(x, y)
        tag, payload = _encode(cell)
        self._tags = self._tags.at[y, x].set(tag)
        self._payload = self._payload.at[y, x].set(payload)

    def number_at(self, x: int, y: int) -> jnp.ndarray:
        """Int32 scalar payload of a Number cell."""
        self._check(x, y)
        tag = int(self._tags[y, x])
        if tag != TAG_NUMBER:
            raise BSTypeError(f"cell ({x}, {y}) holds a {_TAG_NAMES[tag]}, expected a number")
        return self._payload[y, x]

    def set_number(self, x: int, y: int, value) -> None:
        self._check(x, y)
        self._tags = self._tags.at[y, x].set(TAG_NUMBER)
        self._payload = self._payload.at[y, x].set(jnp.asarray(value, dtype=jnp.int32))

    def region(self, beg: Vec2, end: Vec2) -> list[list[Cell]]:
        """Rows of cells covering the normalized rectangle beg..end, inclusive."""
        self._check(beg.x, beg.y)
        self._check(end.x, end.y)
        tags = self._tags[beg.y : end.y + 1, beg.x : end.x + 1].tolist()
        payload = self._payload[beg.y : end.y + 1, beg.x : end.x + 1].tolist()
        return [
            [_decode(tag, value) for tag, value in zip(tag_row, payload_row, strict=True)]
            for tag_row, payload_row in zip(tags, payload, strict=True)
        ]
