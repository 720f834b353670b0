"""Path data (the ``d`` attribute) and the path shape that holds it."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from svgscene.attributes import iter_attributes
from svgscene.shapes import Shape

_LEXEME_PATTERN = re.compile(
    r"(?P<cmd>[A-DF-Za-df-z])"
    r"|(?P<num>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<sep>[\s,]+)"
    r"|(?P<bad>.)",
    re.DOTALL,
)

_Point = tuple[float, float]


@dataclass(frozen=True)
class PathCommand:
    """One path command with its values resolved to absolute coordinates.

    The letter keeps the case it was written in, but every coordinate in
    ``values`` is absolute. ``H``/``h`` and ``V``/``v`` store full ``x, y``
    pairs, ``T``/``t`` store a control point before each end point, and
    ``Z``/``z`` store the point the path was at when it closed.
    """

    command: str
    values: tuple[float, ...] = ()

    @property
    def end(self) -> _Point | None:
        """The last point the command reaches, if it has one."""
        if len(self.values) > 1:
            return self.values[-2], self.values[-1]
        return None


def _lexemes(text: str) -> Iterator[str]:
    for match in _LEXEME_PATTERN.finditer(text):
        kind = match.lastgroup
        if kind == "sep":
            continue
        if kind == "bad":
            raise ValueError(
                f"unexpected character {match.group()!r} at {match.start()} in path data"
            )
        yield match.group()


def normalize_path_data(text: str) -> str:
    """Rewrite path data with single spaces between every command and number.

    Commas become separators, signs and extra decimal points that start a new
    number split it from the one before, and exponents stay attached.
    """
    return " ".join(_lexemes(text))


def _segments(text: str) -> list[tuple[str, list[float]]]:
    segments: list[tuple[str, list[float]]] = []
    for lexeme in _lexemes(text):
        if lexeme.isalpha():
            segments.append((lexeme, []))
        elif not segments:
            raise ValueError("path data must begin with a command")
        else:
            segments[-1][1].append(float(lexeme))
    return segments


def _groups(numbers: Sequence[float], size: int) -> Iterator[tuple[float, ...]]:
    """Yield complete groups of ``size`` numbers; a short tail is dropped."""
    return zip(*[iter(numbers)] * size)


def _reference(
    out: list[float], first: bool, previous: _Point | None, always_leave_first: bool
) -> tuple[_Point, bool]:
    """Pick the point a relative group is measured from, and the next ``first``."""
    if first:
        if previous is not None:
            return previous, False
        return (0.0, 0.0), not always_leave_first
    if len(out) > 1:
        return (out[-2], out[-1]), False
    return (0.0, 0.0), False


def _relative(
    numbers: Sequence[float],
    size: int,
    coord_start: int,
    previous: _Point | None,
    always_leave_first: bool = False,
) -> list[float]:
    out: list[float] = []
    first = True
    for group in _groups(numbers, size):
        (ref_x, ref_y), first = _reference(out, first, previous, always_leave_first)
        for index, value in enumerate(group):
            if index >= coord_start:
                value += ref_x if (index - coord_start) % 2 == 0 else ref_y
            out.append(value)
    return out


def _reflect(values: Sequence[float]) -> list[float]:
    """Reflect a control point ``values[0:2]`` through the point ``values[2:4]``."""
    old_x, old_y, cur_x, cur_y = values
    return [2.0 * cur_x - old_x, 2.0 * cur_y - old_y]


def _smooth_quadratic(
    letter: str, numbers: Sequence[float], previous: PathCommand | None
) -> list[float]:
    out: list[float] = []
    first = True
    for x, y in _groups(numbers, 2):
        if first:
            if previous is None:
                continue
            prior = previous.values
            if previous.command in "QqTt":
                if len(prior) > 3:
                    out += _reflect(prior[-4:])
            elif len(prior) > 1:
                out += prior[-2:]
            if letter == "T":
                out += [x, y]
            elif len(prior) > 1:
                out += [x + prior[-2], y + prior[-1]]
            first = False
        else:
            n = len(out)
            cur_x, cur_y = (out[n - 2], out[n - 1]) if n > 1 else (0.0, 0.0)
            if n > 3:
                out += _reflect(out[n - 4:n])
            if letter == "T":
                out += [x, y]
            else:
                out += [x + cur_x, y + cur_y]
    return out


def _resolve(letter: str, numbers: list[float], previous: PathCommand | None) -> list[float]:
    prev_point = previous.end if previous is not None else None
    if letter == "m":
        return _relative(numbers, 2, 0, prev_point, always_leave_first=True)
    if letter == "l":
        return _relative(numbers, 2, 0, prev_point)
    if letter == "c":
        return _relative(numbers, 6, 0, prev_point)
    if letter in "sq":
        return _relative(numbers, 4, 0, prev_point)
    if letter == "a":
        return _relative(numbers, 7, 5, prev_point)
    if letter in "hv":
        out: list[float] = []
        first = True
        for (value,) in _groups(numbers, 1):
            (ref_x, ref_y), first = _reference(out, first, prev_point, False)
            if letter == "h":
                out += [value + ref_x, ref_y]
            else:
                out += [ref_x, value + ref_y]
        return out
    if letter == "H":
        out = []
        for x in numbers:
            out.append(x)
            if prev_point is not None:
                out.append(prev_point[1])
        return out
    if letter == "V":
        out = []
        for y in numbers:
            if prev_point is not None:
                out.append(prev_point[0])
            out.append(y)
        return out
    if letter in "Tt":
        return _smooth_quadratic(letter, numbers, previous)
    if letter in "Zz":
        return list(prev_point) if prev_point is not None else []
    return list(numbers)


def _parse(text: str, history: Sequence[PathCommand]) -> list[PathCommand]:
    segments = _segments(text)
    if not segments or segments[0][0] not in "Mm":
        raise ValueError("path data must begin with a moveto command")
    previous = history[-1] if history else None
    result: list[PathCommand] = []
    for letter, numbers in segments:
        command = PathCommand(letter, tuple(_resolve(letter, numbers, previous)))
        result.append(command)
        previous = command
    return result


def parse_path_data(text: str) -> list[PathCommand]:
    """Parse path data into commands with absolute coordinates.

    Raises ``ValueError`` if the data is empty, does not start with a moveto,
    or holds characters that are neither commands, numbers nor separators.
    """
    return _parse(text, ())


@dataclass(eq=False)
class Path(Shape):
    """A shape outlined by path data."""

    commands: list[PathCommand] = field(default_factory=list)
    stroke_line_join: str = "miter"
    stroke_line_cap: str = "butt"
    fill_rule: str = "nonzero"

    def update_property(self) -> None:
        """Read line join, line cap and path data from ``line``.

        Reading stops at path data that does not start with a moveto.
        """
        for name, value in iter_attributes(self.line):
            if name == "stroke-linejoin":
                self.stroke_line_join = value
            elif name == "stroke-linecap":
                self.stroke_line_cap = value
            elif name == "d":
                if value[:1] not in ("M", "m"):
                    return
                self.commands.extend(_parse(value, self.commands))