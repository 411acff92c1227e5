"""Cell model: one tagged value per grid position."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Union


class Operation(str, Enum):
    GOTO = "goto"
    RUN = "run"
    RUN_UP = "run_up"
    RUN_LEFT = "run_left"
    RUN_DOWN = "run_down"
    RUN_RIGHT = "run_right"
    SELECT = "select"
    PRINT = "print"
    HALT = "halt"
    ADD = "add"


# Source keywords differ from display names for the four directions.
KEYWORDS: Final[dict[str, Operation]] = {
    "select": Operation.SELECT,
    "print": Operation.PRINT,
    "run": Operation.RUN,
    "up": Operation.RUN_UP,
    "right": Operation.RUN_RIGHT,
    "down": Operation.RUN_DOWN,
    "left": Operation.RUN_LEFT,
    "goto": Operation.GOTO,
    "halt": Operation.HALT,
    "add": Operation.ADD,
}

OPCODES: Final[tuple[Operation, ...]] = tuple(Operation)


@dataclass(frozen=True)
class Nil:
    pass


@dataclass(frozen=True)
class Op:
    code: Operation


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class Char:
    value: str

    def __post_init__(self) -> None:
        if len(self.value) != 1:
            raise ValueError("Char must contain exactly one codepoint")

    @property
    def codepoint(self) -> int:
        return ord(self.value)


Cell = Union[Nil, Op, Number, Char]

NIL: Final[Nil] = Nil()


def render_cell(cell: Cell) -> str:
    """Console text for one cell as emitted by PRINT."""
    if isinstance(cell, Char):
        return cell.value
    if isinstance(cell, Number):
        return str(cell.value)
    if isinstance(cell, Op):
        return f"ERR PRINT: Operation <{cell.code.value}> cannot be printed\n"
    return ""
