"""Turn resolved path commands into an outline of line and cubic segments."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from itertools import pairwise

from svgscene.geometry import Point, Rect
from svgscene.path_data import PathCommand

# Control-point factor used for an exact quarter turn.
KAPPA = 0.551915024494
HALF_PI = math.pi / 2.0


@dataclass(frozen=True)
class LineTo:
    """A straight segment."""

    start: Point
    end: Point


@dataclass(frozen=True)
class CubicTo:
    """A cubic Bézier segment."""

    start: Point
    control1: Point
    control2: Point
    end: Point


Segment = LineTo | CubicTo


def _cubic_extent(p0: float, p1: float, p2: float, p3: float) -> tuple[float, float]:
    """The smallest and largest value one coordinate of a cubic reaches."""
    a = -p0 + 3.0 * p1 - 3.0 * p2 + p3
    b = 2.0 * (p0 - 2.0 * p1 + p2)
    c = p1 - p0
    roots: list[float] = []
    if abs(a) < 1e-12:
        if abs(b) > 1e-12:
            roots.append(-c / b)
    else:
        disc = b * b - 4.0 * a * c
        if disc >= 0.0:
            root = math.sqrt(disc)
            roots += [(-b + root) / (2.0 * a), (-b - root) / (2.0 * a)]

    def at(t: float) -> float:
        mt = 1.0 - t
        return mt**3 * p0 + 3.0 * mt * mt * t * p1 + 3.0 * mt * t * t * p2 + t**3 * p3

    values = [p0, p3] + [at(t) for t in roots if 0.0 < t < 1.0]
    return min(values), max(values)


def _segment_extents(segment: Segment) -> tuple[float, float, float, float]:
    if isinstance(segment, LineTo):
        xs = (segment.start.x, segment.end.x)
        ys = (segment.start.y, segment.end.y)
        return min(xs), min(ys), max(xs), max(ys)
    points = (segment.start, segment.control1, segment.control2, segment.end)
    lo_x, hi_x = _cubic_extent(*(p.x for p in points))
    lo_y, hi_y = _cubic_extent(*(p.y for p in points))
    return lo_x, lo_y, hi_x, hi_y


@dataclass
class Outline:
    """Figures of connected segments; each figure may be closed."""

    figures: list[list[Segment]] = field(default_factory=list)
    closed: list[bool] = field(default_factory=list)

    def _start_figure(self) -> None:
        if not self.figures or self.figures[-1]:
            self.figures.append([])
            self.closed.append(False)

    def _add(self, segment: Segment) -> None:
        if not self.figures or self.closed[-1]:
            self._start_figure()
        self.figures[-1].append(segment)

    def _prune(self) -> None:
        kept = [(f, c) for f, c in zip(self.figures, self.closed) if f]
        self.figures = [f for f, _ in kept]
        self.closed = [c for _, c in kept]

    def close(self) -> None:
        """Close the current figure; later segments start a new one."""
        if self.figures and self.figures[-1]:
            self.closed[-1] = True

    def bounds(self) -> Rect:
        """The smallest rectangle enclosing every segment; empty outlines give a zero rect."""
        extents = [_segment_extents(s) for figure in self.figures for s in figure]
        if not extents:
            return Rect()
        left = min(e[0] for e in extents)
        top = min(e[1] for e in extents)
        right = max(e[2] for e in extents)
        bottom = max(e[3] for e in extents)
        return Rect(left, top, right - left, bottom - top)


def _clamp_unit(value: float) -> float:
    return min(max(value, -1.0), 1.0)


def arc_to_beziers(
    start: Point,
    rx: float,
    ry: float,
    x_axis_rotation: float,
    large_arc: bool,
    sweep: bool,
    end: Point,
) -> list[CubicTo]:
    """Approximate an elliptical arc by cubic segments of at most a quarter turn.

    Radii too small to reach the end point are scaled up. An arc whose end
    equals its start, or with a zero radius, gives no segments.
    """
    sx, sy, ex, ey = start.x, start.y, end.x, end.y
    angle = x_axis_rotation * math.pi / 180.0
    cos_a, sin_a = math.cos(angle), math.sin(angle)

    half_dx = (sx - ex) / 2.0
    half_dy = (sy - ey) / 2.0
    x1 = cos_a * half_dx + sin_a * half_dy
    y1 = -sin_a * half_dx + cos_a * half_dy

    rx, ry = abs(rx), abs(ry)
    if rx == 0.0 or ry == 0.0 or (x1 == 0.0 and y1 == 0.0):
        return []

    lam = (x1 * x1) / (rx * rx) + (y1 * y1) / (ry * ry)
    if lam > 1.0:
        rx *= math.sqrt(lam)
        ry *= math.sqrt(lam)

    sign = -1.0 if bool(large_arc) == bool(sweep) else 1.0
    num = rx * rx * ry * ry - rx * rx * y1 * y1 - ry * ry * x1 * x1
    den = rx * rx * y1 * y1 + ry * ry * x1 * x1
    root = sign * math.sqrt(max(num, 0.0) / den)
    x2 = root * rx * y1 / ry
    y2 = -root * ry * x1 / rx

    cx = cos_a * x2 - sin_a * y2 + (sx + ex) / 2.0
    cy = sin_a * x2 + cos_a * y2 + (sy + ey) / 2.0

    ua = (x1 - x2) / rx
    ub = (y1 - y2) / ry
    uc = (-x1 - x2) / rx
    ud = (-y1 - y2) / ry

    start_angle = (-1.0 if ub < 0 else 1.0) * math.acos(_clamp_unit(ua / math.hypot(ua, ub)))
    turn = -1.0 if ua * ud - ub * uc < 0 else 1.0
    delta = turn * math.acos(
        _clamp_unit((ua * uc + ub * ud) / (math.hypot(ua, ub) * math.hypot(uc, ud)))
    )
    if not sweep and delta > 0:
        delta -= 2.0 * math.pi
    elif sweep and delta < 0:
        delta += 2.0 * math.pi

    ratio = abs(delta) / HALF_PI
    if abs(1.0 - ratio) < 0.0000001:
        ratio = 1.0
    segments = max(math.ceil(ratio), 1)
    delta /= segments

    if delta == HALF_PI:
        kappa = KAPPA
    elif delta == -HALF_PI:
        kappa = -KAPPA
    else:
        kappa = 4.0 / 3.0 * math.tan(delta / 4.0)

    def mapped(ux: float, uy: float) -> Point:
        return Point(
            cos_a * ux * rx - sin_a * uy * ry + cx,
            sin_a * ux * rx + cos_a * uy * ry + cy,
        )

    result: list[CubicTo] = []
    current = Point(sx, sy)
    for _ in range(segments):
        x3, y3 = math.cos(start_angle), math.sin(start_angle)
        x4, y4 = math.cos(start_angle + delta), math.sin(start_angle + delta)
        c1 = mapped(x3 - y3 * kappa, y3 + x3 * kappa)
        c2 = mapped(x4 + y4 * kappa, y4 - x4 * kappa)
        target = mapped(x4, y4)
        result.append(CubicTo(current, c1, c2, target))
        current = target
        start_angle += delta
    return result


def _points(values: Sequence[float]) -> list[Point]:
    return [Point(x, y) for x, y in zip(values[::2], values[1::2])]


def _groups(values: Sequence[float], size: int) -> Iterator[tuple[float, ...]]:
    return zip(*[iter(values)] * size)


def build_outline(commands: Iterable[PathCommand], has_gradient: bool) -> Outline:
    """Build the outline that resolved path commands describe.

    A moveto starts a new figure. Without a gradient its points form a
    polyline; with one, lines run from the current point through each of them.
    Quadratic curves are drawn as cubics with a repeated end point.
    """
    outline = Outline()
    current = Point()
    previous: PathCommand | None = None
    for command in commands:
        letter, values = command.command, command.values
        if letter in "Mm":
            outline._start_figure()
            points = _points(values)
            if has_gradient:
                for point in points:
                    outline._add(LineTo(current, point))
                    current = point
            elif len(values) == 4:
                outline._add(LineTo(points[0], points[1]))
                current = points[1]
            elif len(values) > 4:
                for a, b in pairwise(points):
                    outline._add(LineTo(a, b))
                current = points[-1]
            elif points:
                current = points[0]
        elif letter in "QqTt":
            for x1, y1, x2, y2 in _groups(values, 4):
                control, target = Point(x1, y1), Point(x2, y2)
                outline._add(CubicTo(current, control, target, target))
                current = target
        elif letter in "Cc":
            for x1, y1, x2, y2, x3, y3 in _groups(values, 6):
                target = Point(x3, y3)
                outline._add(CubicTo(current, Point(x1, y1), Point(x2, y2), target))
                current = target
        elif letter in "Ss":
            reflected: Point | None = None
            if previous is not None and previous.command in "CcSs" and len(previous.values) > 3:
                old_x, old_y, cur_x, cur_y = previous.values[-4:]
                reflected = Point(2.0 * cur_x - old_x, 2.0 * cur_y - old_y)
            for x2, y2, x3, y3 in _groups(values, 4):
                control1 = reflected if reflected is not None else current
                target = Point(x3, y3)
                outline._add(CubicTo(current, control1, Point(x2, y2), target))
                current = target
        elif letter in "Aa":
            if previous is not None and len(previous.values) > 1:
                for rx, ry, rotation, large, sweep, ex, ey in _groups(values, 7):
                    target = Point(ex, ey)
                    for cubic in arc_to_beziers(
                        current, rx, ry, rotation, bool(large), bool(sweep), target
                    ):
                        outline._add(cubic)
                    current = target
        elif letter in "LHVlhv":
            for point in _points(values):
                outline._add(LineTo(current, point))
                current = point
        elif letter in "Zz":
            outline.close()
        previous = command
    outline._prune()
    return outline