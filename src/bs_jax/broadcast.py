"""Rank-polymorphic application of cell-level operations over selections.

An operation is written for arguments of fixed, expected ranks (for ADD,
three single cells). ``replicate`` lifts it to selections of higher rank by
slicing along the leading axis of the highest-ranked surplus arguments and
recursing, the way an array language's rank operator splits a frame into
cells. Lower-ranked arguments are reused unchanged in every application.
"""

from __future__ import annotations

from typing import Callable, Sequence

from jax import lax

from .errors import BSShapeError
from .grid import Grid
from .selection import Selection, Shape, selection_at, shape_of

CellOperation = Callable[[Grid, Sequence[Selection]], None]


def _outer_extent(shapes: Sequence[Shape], ranks: Sequence[int], max_rank: int) -> int:
    extents = {shape.extents[0] for shape, rank in zip(shapes, ranks, strict=True) if rank < shape.rank == max_rank}
    if len(extents) != 1:
        lengths = ", ".join(str(n) for n in sorted(extents))
        raise BSShapeError(f"replicated selections have mismatched leading extents ({lengths})")
    return extents.pop()


def replicate(fn: CellOperation, grid: Grid, args: Sequence[Selection], ranks: Sequence[int]) -> None:
    if len(args) != len(ranks):
        raise BSShapeError(f"expected {len(ranks)} selections, got {len(args)}")

    shapes = [shape_of(arg) for arg in args]
    for shape, rank in zip(shapes, ranks, strict=True):
        if shape.rank < rank:
            raise BSShapeError(f"selection of rank {shape.rank} where rank {rank} is required")

    if all(shape.rank == rank for shape, rank in zip(shapes, ranks, strict=True)):
        fn(grid, args)
        return

    max_rank = max(shape.rank for shape, rank in zip(shapes, ranks, strict=True) if shape.rank > rank)
    for shape, rank in zip(shapes, ranks, strict=True):
        if shape.rank != max_rank and shape.rank != rank:
            raise BSShapeError(
                f"cannot broadcast rank {shape.rank} selection against rank {max_rank} (expected rank {rank})"
            )

    outer = _outer_extent(shapes, ranks, max_rank)
    for i in range(outer):
        sliced = [
            selection_at(arg, i) if rank < shape.rank == max_rank else arg
            for arg, shape, rank in zip(args, shapes, ranks, strict=True)
        ]
        replicate(fn, grid, sliced, ranks)


def add(grid: Grid, args: Sequence[Selection]) -> None:
    """z := x + y on single cells, with int32 wraparound."""
    if len(args) != 3:
        raise BSShapeError(f"add takes 3 selections, got {len(args)}")
    z, y, x = args
    total = lax.add(grid.number_at(x.beg.x, x.beg.y), grid.number_at(y.beg.x, y.beg.y))
    grid.set_number(z.beg.x, z.beg.y, total)
