"""Helpers for the attribute and transform text found inside SVG tags."""

from __future__ import annotations

import re
from collections.abc import Iterator

Transform = tuple[str, tuple[float, ...]]

_PAIR = re.compile(r'([^\s="]+)[^"]*"([^"]*)"?')
_NUMBER = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:infinity|inf|nan))",
    re.IGNORECASE,
)
_SEPARATORS = re.compile(r"[\s,]+")

# Number of values each transform takes; the largest count that fits is used.
_ARITY: dict[str, tuple[int, ...]] = {
    "translate": (2,),
    "rotate": (1,),
    "scale": (2, 1),
    "matrix": (6,),
}


def _leading_float(text: str) -> float:
    """Read the number at the start of ``text``, ignoring any trailing unit."""
    match = _NUMBER.match(text)
    if match is None:
        raise ValueError(f"invalid number: {text!r}")
    return float(match.group(1))


def iter_attributes(text: str) -> Iterator[tuple[str, str]]:
    """Yield ``(name, value)`` pairs from text such as ``cx "10" cy "20"``.

    Each name is followed by a double-quoted value; any text between the name
    and the opening quote is skipped. A trailing name with no quoted value is
    ignored.
    """
    for match in _PAIR.finditer(text):
        yield match.group(1), match.group(2)


def parse_transform(text: str) -> list[Transform]:
    """Parse an SVG transform list into ``(name, values)`` pairs.

    ``translate`` takes two values, ``rotate`` one, ``scale`` one or two and
    ``matrix`` six; values beyond those are ignored and unknown transforms are
    skipped. Too few values raise ``ValueError``.
    """
    result: list[Transform] = []
    for chunk in text.split(")"):
        head, paren, body = chunk.lstrip(" \t\r\n,").partition("(")
        if not paren:
            continue
        name = head.strip()
        counts = _ARITY.get(name)
        if counts is None:
            continue
        tokens = [token for token in _SEPARATORS.split(body) if token]
        count = next((n for n in counts if len(tokens) >= n), None)
        if count is None:
            raise ValueError(
                f"{name}() needs {min(counts)} value(s), got {len(tokens)}: {body!r}"
            )
        result.append((name, tuple(_leading_float(token) for token in tokens[:count])))
    return result