"""Cursor, run-vector and operation dispatch for the selection machine."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Final, TextIO

from . import broadcast
from .cells import Op, Operation, render_cell
from .config import MachineConfig
from .errors import BSOutOfBoundsError, BSStepLimitError
from .grid import Grid
from .selection import ORIGIN, Selection, SelectionStack, Vec2, axis_step, shape_of

logger = logging.getLogger(__name__)

_RUN_DIRECTIONS: Final[dict[Operation, Vec2]] = {
    Operation.RUN_UP: Vec2(0, -1),
    Operation.RUN_LEFT: Vec2(-1, 0),
    Operation.RUN_DOWN: Vec2(0, 1),
    Operation.RUN_RIGHT: Vec2(1, 0),
}

_GOTO_SHAPE_ERROR: Final[str] = "ERROR GOTO: Current selection is not a 1 dimensional vector of length 2\n"
_RUN_SHAPE_ERROR: Final[str] = "ERROR RUN: Current selection is not a vector of shape 2\n"

_ADD_RANKS: Final[tuple[int, int, int]] = (0, 0, 0)


@dataclass(frozen=True)
class MachineSnapshot:
    cursor: Vec2
    run: Vec2
    halted: bool
    is_selecting: bool
    depth: int
    steps: int


class Machine:
    """Owns one grid, one selection stack, the cursor, the run-vector and the halt flag."""

    def __init__(self, grid: Grid, *, out: TextIO | None = None, config: MachineConfig | None = None) -> None:
        self.grid = grid
        self.selections = SelectionStack()
        self.cursor = ORIGIN
        self.run_vector = ORIGIN
        self.halted = False
        self.steps = 0
        self.out = out if out is not None else sys.stdout
        self.config = config if config is not None else MachineConfig.from_env()
        self._handlers: dict[Operation, Callable[[], bool]] = {
            Operation.GOTO: self._op_goto,
            Operation.RUN: self._op_run,
            Operation.SELECT: self._op_select,
            Operation.PRINT: self._op_print,
            Operation.HALT: self._op_halt,
            Operation.ADD: self._op_add,
        }

    def state(self) -> MachineSnapshot:
        return MachineSnapshot(
            cursor=self.cursor,
            run=self.run_vector,
            halted=self.halted,
            is_selecting=self.selections.is_selecting,
            depth=len(self.selections),
            steps=self.steps,
        )

    def step(self) -> None:
        if self.halted:
            return
        x, y = self.cursor.x, self.cursor.y
        if not self.grid.in_bounds(x, y):
            raise BSOutOfBoundsError(x, y, self.grid.width, self.grid.height)

        jumped = False
        cell = self.grid.get(x, y)
        if isinstance(cell, Op):
            logger.debug("step %d: %s at (%d, %d)", self.steps, cell.code.value, x, y)
            jumped = self.execute(cell.code)
        if not jumped:
            self.cursor = self.cursor + self.run_vector

        self.steps += 1
        limit = self.config.max_steps
        if limit is not None and self.steps >= limit and not self.halted:
            raise BSStepLimitError(f"no halt after {self.steps} step(s)")

    def run(self) -> int:
        while not self.halted:
            self.step()
        logger.info("halted after %d step(s)", self.steps)
        return self.steps

    def execute(self, code: Operation) -> bool:
        """Apply one operation; True when it placed the cursor itself."""
        direction = _RUN_DIRECTIONS.get(code)
        if direction is not None:
            self.run_vector = direction
            return False
        return self._handlers[code]()

    def _pair_from(self, sel: Selection) -> Vec2 | None:
        shape = shape_of(sel)
        if shape.rank != 1 or shape.extents != (2,):
            return None
        second = sel.beg + axis_step(sel)
        return Vec2(
            int(self.grid.number_at(sel.beg.x, sel.beg.y)),
            int(self.grid.number_at(second.x, second.y)),
        )

    def _op_goto(self) -> bool:
        sel = self.selections.pop()
        target = self._pair_from(sel)
        if target is None:
            self.selections.push(sel)
            self._emit(_GOTO_SHAPE_ERROR)
            return False
        self.cursor = target
        return True

    def _op_run(self) -> bool:
        sel = self.selections.pop()
        vector = self._pair_from(sel)
        if vector is None:
            self.selections.push(sel)
            self._emit(_RUN_SHAPE_ERROR)
            return False
        self.run_vector = vector
        return False

    def _op_select(self) -> bool:
        if self.selections.is_selecting:
            self.selections.end(self.cursor, self.run_vector)
        else:
            self.selections.begin(self.cursor, self.run_vector)
        return False

    def _op_print(self) -> bool:
        sel = self.selections.pop()
        for row in self.grid.region(sel.beg, sel.end):
            self.out.write("".join(render_cell(cell) for cell in row))
        self.out.flush()
        return False

    def _op_halt(self) -> bool:
        self.halted = True
        return False

    def _op_add(self) -> bool:
        z = self.selections.pop()
        y = self.selections.pop()
        x = self.selections.pop()
        broadcast.replicate(broadcast.add, self.grid, (z, y, x), _ADD_RANKS)
        self.selections.push(z)
        return False

    def _emit(self, text: str) -> None:
        logger.debug("diagnostic: %s", text.rstrip())
        self.out.write(text)
        self.out.flush()


def run_program(grid: Grid, *, out: TextIO | None = None, config: MachineConfig | None = None) -> Machine:
    machine = Machine(grid, out=out, config=config)
    machine.run()
    return machine
