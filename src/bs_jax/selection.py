"""Selections, their shapes, and the selection stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .errors import BSSelectionError, BSStackUnderflowError


@dataclass(frozen=True)
class Vec2:
    x: int
    y: int

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)


ORIGIN = Vec2(0, 0)


@dataclass(frozen=True)
class Selection:
    beg: Vec2
    end: Vec2

    @property
    def is_horizontal(self) -> bool:
        return self.beg.y == self.end.y


@dataclass(frozen=True)
class Shape:
    rank: int
    extents: tuple[int, ...]


def normalize(beg: Vec2, end: Vec2) -> Selection:
    """Order each axis independently so that beg <= end componentwise."""
    x0, x1 = (beg.x, end.x) if beg.x <= end.x else (end.x, beg.x)
    y0, y1 = (beg.y, end.y) if beg.y <= end.y else (end.y, beg.y)
    return Selection(Vec2(x0, y0), Vec2(x1, y1))


def shape_of(sel: Selection) -> Shape:
    width = sel.end.x - sel.beg.x + 1
    height = sel.end.y - sel.beg.y + 1
    if sel.beg == sel.end:
        return Shape(0, ())
    if sel.beg.y == sel.end.y:
        return Shape(1, (width,))
    if sel.beg.x == sel.end.x:
        return Shape(1, (height,))
    return Shape(2, (height, width))


def rank_of(sel: Selection) -> int:
    return shape_of(sel).rank


def selection_at(sel: Selection, i: int) -> Selection:
    """The i-th slice of `sel` along its leading axis."""
    if sel.is_horizontal:
        x = sel.beg.x + i
        return Selection(Vec2(x, sel.beg.y), Vec2(x, sel.end.y))
    y = sel.beg.y + i
    return Selection(Vec2(sel.beg.x, y), Vec2(sel.end.x, y))


def axis_step(sel: Selection) -> Vec2:
    """Unit vector pointing from `beg` to its neighbour along a rank-1 selection."""
    return Vec2(1, 0) if sel.is_horizontal else Vec2(0, 1)


@dataclass
class SelectionStack:
    """LIFO of normalized selections plus one open begin point."""

    _items: list[Selection] = field(default_factory=list)
    _open: Vec2 | None = None

    @property
    def is_selecting(self) -> bool:
        return self._open is not None

    def begin(self, cursor: Vec2, run: Vec2) -> None:
        if self._open is not None:
            raise BSSelectionError("selection already open")
        self._open = cursor + run

    def end(self, cursor: Vec2, run: Vec2) -> Selection:
        if self._open is None:
            raise BSSelectionError("no open selection to close")
        sel = normalize(self._open, cursor - run)
        self._open = None
        self.push(sel)
        return sel

    def push(self, sel: Selection) -> None:
        self._items.append(sel)

    def pop(self) -> Selection:
        if not self._items:
            raise BSStackUnderflowError("selection stack is empty")
        return self._items.pop()

    def peek(self) -> Selection:
        if not self._items:
            raise BSStackUnderflowError("selection stack is empty")
        return self._items[-1]

    def clear(self) -> None:
        self._items.clear()
        self._open = None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Selection]:
        return reversed(self._items)
