import pytest

from svgscene.geometry import Color, Point, Rect
from svgscene.gradient import (
    Gradient,
    GradientType,
    GradientUnits,
    LinearBrush,
    LinearGradient,
    Stop,
    parse_svg_value,
)


def _gradient(line, *stops):
    grad = LinearGradient(line)
    grad.update_element()
    for stop in stops:
        grad.add_stop(stop)
    return grad


def test_parse_svg_value_empty_is_zero():
    assert parse_svg_value("") == 0.0


def test_parse_svg_value_plain():
    assert parse_svg_value("0.25") == 0.25


def test_parse_svg_value_percent_matches_fraction():
    assert parse_svg_value("50%") == parse_svg_value("0.5")


def test_parse_svg_value_invalid():
    with pytest.raises(ValueError):
        parse_svg_value("abc")


def test_gradient_is_abstract():
    with pytest.raises(TypeError):
        Gradient()


def test_update_element_reads_vector_units_and_transform():
    grad = _gradient(
        'x1 "0" y1 "2" x2 "1" y2 "3" gradientUnits "userSpaceOnUse" '
        'gradientTransform "rotate(45)"'
    )
    assert grad.start == Point(0.0, 2.0)
    assert grad.end == Point(1.0, 3.0)
    assert grad.units is GradientUnits.USER_SPACE_ON_USE
    assert grad.transforms == [("rotate", (45.0,))]
    assert grad.gradient_type is GradientType.LINEAR


def test_default_units_are_bounding_box():
    assert _gradient('x2 "1"').units is GradientUnits.OBJECT_BOUNDING_BOX
    assert _gradient('gradientUnits "other"').units is GradientUnits.OBJECT_BOUNDING_BOX


def test_percent_coordinates():
    grad = _gradient('x1 "50%" x2 "0.5"')
    assert grad.start.x == grad.end.x


def test_update_transform_accumulates():
    grad = LinearGradient()
    grad.update_transform("translate(1 2)")
    grad.update_transform("scale(3)")
    assert grad.transforms == [("translate", (1.0, 2.0)), ("scale", (3.0,))]


def test_add_stop_appends():
    grad = LinearGradient()
    first, second = Stop(Color(1, 2, 3), 0.0), Stop(Color(4, 5, 6), 1.0)
    grad.add_stop(first)
    grad.add_stop(second)
    assert grad.stops == [first, second]


def test_brush_without_stops_fails():
    with pytest.raises(ValueError):
        LinearGradient().brush(Rect(0, 0, 10, 10))


def test_brush_keeps_complete_stops():
    stops = [Stop(Color(10, 20, 30), 0.0), Stop(Color(40, 50, 60, 0.5), 1.0)]
    brush = _gradient('x2 "1"', *stops).brush(Rect(0, 0, 5, 5))
    assert isinstance(brush, LinearBrush)
    assert list(brush.stops) == stops


def test_brush_pads_missing_end_stops():
    middle = [Stop(Color(200, 100, 50), 0.25), Stop(Color(20, 10, 5), 0.75)]
    brush = _gradient('x2 "1"', *middle).brush(Rect(0, 0, 5, 5))
    assert len(brush.stops) == 4
    assert brush.stops[0].offset == 0.0
    assert brush.stops[-1].offset == 1.0
    assert list(brush.stops[1:3]) == middle


def test_brush_first_padding_fades_color():
    brush = _gradient('x2 "1"', Stop(Color(100, 50, 20, 1), 0.5)).brush(Rect(0, 0, 1, 1))
    assert brush.stops[0] == Stop(Color(50, 25, 10, 0.5), 0.0)


def test_brush_padding_is_clamped():
    brush = _gradient('x2 "1"', Stop(Color(250, 250, 250, 1), 0.1)).brush(Rect(0, 0, 1, 1))
    for stop in brush.stops:
        assert max(stop.color.r, stop.color.g, stop.color.b) <= 255
        assert 0 <= stop.color.opacity <= 1


def test_brush_does_not_share_stops():
    grad = _gradient('x2 "1"', Stop(Color(1, 2, 3), 0.0), Stop(Color(4, 5, 6), 1.0))
    brush = grad.brush(Rect(0, 0, 1, 1))
    brush.stops[0].color.r = 99
    assert grad.stops[0].color.r == 1


def test_brush_maps_bounding_box_vector():
    bounds = Rect(10, 20, 30, 40)
    brush = _gradient('x1 "0" y1 "0" x2 "1" y2 "1"', Stop()).brush(bounds)
    assert brush.start == Point(bounds.x, bounds.y)
    assert brush.end == Point(bounds.x + bounds.width, bounds.y + bounds.height)


def test_brush_user_space_vector_unchanged():
    grad = _gradient('x1 "3" y1 "4" x2 "70" y2 "80" gradientUnits "userSpaceOnUse"', Stop())
    brush = grad.brush(Rect(10, 20, 30, 40))
    assert brush.start == Point(3, 4)
    assert brush.end == Point(70, 80)


def test_brush_scales_translate_in_bounding_box():
    bounds = Rect(0, 0, 30, 40)
    grad = _gradient('gradientTransform "translate(1,1)"', Stop())
    assert grad.brush(bounds).transforms == (("translate", (30.0, 40.0)),)


def test_brush_scales_matrix_offset_in_bounding_box():
    bounds = Rect(0, 0, 30, 40)
    grad = _gradient('gradientTransform "matrix(1 0 0 1 1 1)"', Stop())
    assert grad.brush(bounds).transforms == (("matrix", (1.0, 0.0, 0.0, 1.0, 30.0, 40.0)),)


def test_brush_user_space_transforms_unchanged():
    grad = _gradient(
        'gradientUnits "userSpaceOnUse" gradientTransform "translate(1,1) matrix(1 0 0 1 5 6)"',
        Stop(),
    )
    assert grad.brush(Rect(0, 0, 30, 40)).transforms == (
        ("translate", (1.0, 1.0)),
        ("matrix", (1.0, 0.0, 0.0, 1.0, 5.0, 6.0)),
    )


def test_brush_single_scale_becomes_uniform():
    grad = _gradient('gradientTransform "scale(2)"', Stop())
    assert grad.brush(Rect(0, 0, 1, 1)).transforms == (("scale", (2.0, 2.0)),)