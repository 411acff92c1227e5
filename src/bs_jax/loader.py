"""Loader for ``x y token`` source records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .cells import KEYWORDS, Cell, Char, Number, Op
from .errors import BSIOError, BSLoadError
from .grid import INT32_MAX, INT32_MIN, Grid

logger = logging.getLogger(__name__)

_CHAR_ESCAPES: Final[dict[str, str]] = {
    "n": "\n",
    "s": " ",
}


@dataclass(frozen=True)
class Record:
    x: int
    y: int
    token: str
    line: int
    pos: int
    end: int


def _fields(text: str) -> list[tuple[str, int, int]]:
    out: list[tuple[str, int, int]] = []
    i = 0
    while i < len(text):
        if text[i].isspace():
            i += 1
            continue
        start = i
        while i < len(text) and not text[i].isspace():
            i += 1
        out.append((text[start:i], start, i))
    return out


def _parse_coordinate(text: str, *, line: int, start: int, end: int) -> int:
    if not text.isascii() or not text.isdigit():
        raise BSLoadError("Invalid coordinate", line, start, end, found=text)
    return int(text)


def scan_records(source: str) -> list[Record]:
    records: list[Record] = []
    for line_no, text in enumerate(source.splitlines(), start=1):
        fields = _fields(text)
        if not fields:
            continue
        if len(fields) != 3:
            raise BSLoadError(
                f"Expected 'x y token', got {len(fields)} field(s)",
                line_no,
                fields[0][1],
                fields[-1][2],
                found=text.strip(),
            )
        (xs, x0, x1), (ys, y0, y1), (token, t0, t1) = fields
        x = _parse_coordinate(xs, line=line_no, start=x0, end=x1)
        y = _parse_coordinate(ys, line=line_no, start=y0, end=y1)
        records.append(Record(x=x, y=y, token=token, line=line_no, pos=t0, end=t1))
    return records


def _looks_numeric(text: str) -> bool:
    if text[0] in {"-", "+"}:
        return len(text) > 1 and text[1].isascii() and text[1].isdigit()
    return text[0].isascii() and text[0].isdigit()


def _parse_char(text: str, *, line: int, start: int, end: int) -> Char:
    body = text[1:]
    if not body:
        raise BSLoadError("Empty character literal", line, start, end, found=text)
    if body[0] == "\\":
        escape = body[1:2]
        if escape not in _CHAR_ESCAPES:
            raise BSLoadError(f'Unknown escape sequence "\\{escape}"', line, start, end, found=text)
        literal, rest = _CHAR_ESCAPES[escape], body[2:]
    else:
        literal, rest = body[0], body[1:]
    if rest:
        raise BSLoadError("Trailing characters after character literal", line, start, end, found=text)
    return Char(literal)


def _parse_number(text: str, *, line: int, start: int, end: int) -> Number:
    digits = text[1:] if text[0] in {"-", "+"} else text
    if not digits.isascii() or not digits.isdigit():
        raise BSLoadError("Couldn't parse number", line, start, end, found=text)
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        raise BSLoadError("Number does not fit in 32 bits", line, start, end, found=text)
    return Number(value)


def parse_token(text: str, *, line: int = 0, start: int = 0, end: int | None = None) -> Cell:
    end = start + len(text) if end is None else end
    if not text:
        raise BSLoadError("Empty token", line, start, end, found=text)
    if text[0] == "'":
        return _parse_char(text, line=line, start=start, end=end)
    if _looks_numeric(text):
        return _parse_number(text, line=line, start=start, end=end)
    op = KEYWORDS.get(text)
    if op is None:
        raise BSLoadError(f'Couldn\'t parse operation "{text}"', line, start, end, found=text)
    return Op(op)


def load(source: str, height: int, width: int) -> Grid:
    """Build a grid from source records; any bad record rejects the whole load."""
    grid = Grid(height, width)
    records = scan_records(source)
    for rec in records:
        if not grid.in_bounds(rec.x, rec.y):
            raise BSLoadError(
                f"index ({rec.x}, {rec.y}) exceeds table of {height}x{width}",
                rec.line,
                0,
                rec.end,
            )
        grid.set(rec.x, rec.y, parse_token(rec.token, line=rec.line, start=rec.pos, end=rec.end))
    logger.info("loaded %d record(s) into a %dx%d grid", len(records), height, width)
    return grid


def load_file(path: str | Path, height: int, width: int) -> Grid:
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BSIOError(str(path), exc.__class__.__name__) from exc
    return load(source, height, width)
