"""Gradient definitions and the linear gradient brush they produce."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum, auto

from svgscene.attributes import Transform, _leading_float, iter_attributes, parse_transform
from svgscene.geometry import Color, Point, Rect


class GradientUnits(Enum):
    """Coordinate system that gradient vectors are given in."""

    USER_SPACE_ON_USE = "userSpaceOnUse"
    OBJECT_BOUNDING_BOX = "objectBoundingBox"


class GradientType(Enum):
    """Kind of gradient."""

    LINEAR = auto()
    RADIAL = auto()


@dataclass
class Stop:
    """A colour at a position along the gradient."""

    color: Color = field(default_factory=Color)
    offset: float = 0.0


def parse_svg_value(text: str) -> float:
    """Read a gradient coordinate; percentages become fractions, empty text is 0."""
    if not text:
        return 0.0
    head, percent, _ = text.partition("%")
    if percent:
        return _leading_float(head) / 100.0
    return _leading_float(text)


class Gradient(ABC):
    """Common state of a gradient read from a ``<...Gradient>`` tag."""

    def __init__(self, line: str = "", grad_id: int = 0) -> None:
        self.line = line
        self.grad_id = grad_id
        self.units = GradientUnits.OBJECT_BOUNDING_BOX
        self.stops: list[Stop] = []
        self.transforms: list[Transform] = []

    @property
    @abstractmethod
    def gradient_type(self) -> GradientType:
        """The kind of this gradient."""

    @abstractmethod
    def brush(self, bounds: Rect):
        """Resolve this gradient into a brush for the given shape bounds."""

    def add_stop(self, stop: Stop) -> None:
        self.stops.append(stop)

    def update_transform(self, text: str) -> None:
        """Append the transforms in ``text`` to the gradient transform list."""
        self.transforms.extend(parse_transform(text))

    def update_element(self) -> None:
        """Read ``gradientUnits`` and ``gradientTransform`` from ``line``."""
        transform = ""
        for name, value in iter_attributes(self.line):
            if name == "gradientUnits":
                self.units = (
                    GradientUnits.USER_SPACE_ON_USE
                    if value == "userSpaceOnUse"
                    else GradientUnits.OBJECT_BOUNDING_BOX
                )
            elif name == "gradientTransform":
                transform = value
        self.update_transform(transform)


@dataclass(frozen=True)
class LinearBrush:
    """A linear gradient resolved against a shape's bounds."""

    start: Point
    end: Point
    stops: tuple[Stop, ...]
    transforms: tuple[Transform, ...]


def _scaled(color: Color, factor: float) -> Color:
    def clamp(value: float, top: float) -> float:
        return min(max(value, 0.0), top)

    return Color(
        clamp(color.r * factor, 255.0),
        clamp(color.g * factor, 255.0),
        clamp(color.b * factor, 255.0),
        clamp(color.opacity * factor, 1.0),
    )


def _padded_stops(stops: list[Stop]) -> tuple[Stop, ...]:
    """Copy the stops, adding faded end stops at offsets 0 and 1 if missing."""
    padded = [Stop(replace(stop.color), stop.offset) for stop in stops]
    first = padded[0]
    if first.offset != 0:
        padded.insert(0, Stop(_scaled(first.color, 1.0 - first.offset), 0.0))
    last = padded[-1]
    if last.offset != 1:
        factor = 1.0 / last.offset if last.offset else 1.0
        padded.append(Stop(_scaled(last.color, factor), 1.0))
    return tuple(padded)


def _brush_transform(transform: Transform, bounds: Rect | None) -> Transform:
    name, values = transform
    if name == "scale" and len(values) == 1:
        values = (values[0], values[0])
    if bounds is not None:
        if name == "translate":
            values = (values[0] * bounds.width, values[1] * bounds.height)
        elif name == "matrix":
            values = (*values[:4], values[4] * bounds.width, values[5] * bounds.height)
    return name, values


class LinearGradient(Gradient):
    """A gradient along the vector from ``start`` to ``end``."""

    def __init__(self, line: str = "", grad_id: int = 0) -> None:
        super().__init__(line, grad_id)
        self.start = Point()
        self.end = Point()

    @property
    def gradient_type(self) -> GradientType:
        return GradientType.LINEAR

    def update_element(self) -> None:
        """Read the vector, units and transform from ``line``."""
        for name, value in iter_attributes(self.line):
            if name == "x1":
                self.start.x = parse_svg_value(value)
            elif name == "y1":
                self.start.y = parse_svg_value(value)
            elif name == "x2":
                self.end.x = parse_svg_value(value)
            elif name == "y2":
                self.end.y = parse_svg_value(value)
        super().update_element()

    def brush(self, bounds: Rect) -> LinearBrush:
        """Map the vector and transforms into user space for ``bounds``."""
        if not self.stops:
            raise ValueError("a gradient needs at least one stop to make a brush")
        in_box = self.units is GradientUnits.OBJECT_BOUNDING_BOX
        if in_box:
            start = Point(
                bounds.x + self.start.x * bounds.width,
                bounds.y + self.start.y * bounds.height,
            )
            end = Point(
                bounds.x + self.end.x * bounds.width,
                bounds.y + self.end.y * bounds.height,
            )
        else:
            start = Point(self.start.x, self.start.y)
            end = Point(self.end.x, self.end.y)
        box = bounds if in_box else None
        return LinearBrush(
            start=start,
            end=end,
            stops=_padded_stops(self.stops),
            transforms=tuple(_brush_transform(t, box) for t in self.transforms),
        )