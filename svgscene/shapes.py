"""Scene-graph shapes: circles, ellipses, lines and groups."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from svgscene.attributes import Transform, _leading_float, iter_attributes, parse_transform
from svgscene.geometry import Color, Point, Rect, Stroke
from svgscene.gradient import Gradient


@dataclass(eq=False)
class Shape:
    """State common to every drawable element.

    ``line`` holds the element's attribute text, from which each shape kind
    reads its own geometry in :meth:`update_property`.
    """

    name: str = ""
    text_name: str = ""
    line: str = ""
    color: Color = field(default_factory=Color)
    stroke: Stroke = field(default_factory=Stroke)
    gradient: Gradient | None = None
    transforms: list[Transform] = field(default_factory=list)

    def update_transform(self, text: str) -> None:
        """Append the transforms described by ``text``."""
        self.transforms.extend(parse_transform(text))

    def update_property(self) -> None:
        """Read shape-specific geometry from ``line``; plain shapes have none."""


@dataclass(eq=False)
class Circle(Shape):
    """A circle given by its centre and radius."""

    center: Point = field(default_factory=Point)
    radius: float = 0.0

    def update_property(self) -> None:
        for name, value in iter_attributes(self.line):
            if name == "r":
                self.radius = _leading_float(value)
            elif name == "cx":
                self.center.x = _leading_float(value)
            elif name == "cy":
                self.center.y = _leading_float(value)

    def bounds(self) -> Rect:
        """The square that encloses the circle."""
        return Rect.from_center(self.center.x, self.center.y, self.radius, self.radius)


@dataclass(eq=False)
class Ellipse(Shape):
    """An axis-aligned ellipse given by its centre and two radii."""

    center: Point = field(default_factory=Point)
    rx: float = 0.0
    ry: float = 0.0

    def update_property(self) -> None:
        for name, value in iter_attributes(self.line):
            if name == "rx":
                self.rx = _leading_float(value)
            elif name == "ry":
                self.ry = _leading_float(value)
            elif name == "cx":
                self.center.x = _leading_float(value)
            elif name == "cy":
                self.center.y = _leading_float(value)

    def bounds(self) -> Rect:
        """The rectangle that encloses the ellipse."""
        return Rect.from_center(self.center.x, self.center.y, self.rx, self.ry)


@dataclass(eq=False)
class Line(Shape):
    """A straight segment from ``p1`` to ``p2``."""

    p1: Point = field(default_factory=Point)
    p2: Point = field(default_factory=Point)

    def update_property(self) -> None:
        for name, value in iter_attributes(self.line):
            if name == "x1":
                self.p1.x = _leading_float(value)
            elif name == "y1":
                self.p1.y = _leading_float(value)
            elif name == "x2":
                self.p2.x = _leading_float(value)
            elif name == "y2":
                self.p2.y = _leading_float(value)


@dataclass(eq=False)
class Group(Shape):
    """An ordered collection of child shapes sharing a transform."""

    shapes: list[Shape] = field(default_factory=list)
    parent: Group | None = None

    def add_shape(self, shape: Shape) -> None:
        """Append ``shape`` as the last child."""
        self.shapes.append(shape)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)

    def __len__(self) -> int:
        return len(self.shapes)