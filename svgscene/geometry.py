"""Basic geometric and colour values shared by shapes and gradients."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Point:
    """A point in user space; equality looks at the coordinates only."""

    x: float = 0.0
    y: float = 0.0
    intersect: bool = field(default=False, compare=False)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_center(cls, cx: float, cy: float, rx: float, ry: float) -> Rect:
        """Build the box around a centre with the given half-extents."""
        return cls(cx - rx, cy - ry, 2.0 * rx, 2.0 * ry)


@dataclass
class Color:
    """An RGB colour with channels in 0..255 and opacity in 0..1."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    opacity: float = 1.0


@dataclass
class Stroke:
    """Outline colour and width."""

    color: Color = field(default_factory=Color)
    width: float = 1.0