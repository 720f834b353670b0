from svgscene.geometry import Color, Point, Rect, Stroke


def test_point_defaults():
    p = Point()
    assert (p.x, p.y, p.intersect) == (0.0, 0.0, False)


def test_point_equality_ignores_intersect():
    assert Point(1.5, 2.5, intersect=True) == Point(1.5, 2.5)
    assert not Point(1.5, 2.5) == Point(1.5, 3.0)


def test_point_is_mutable():
    p = Point()
    p.x = 4.0
    p.y = 7.0
    assert p == Point(4.0, 7.0)


def test_rect_from_center_pinned():
    assert Rect.from_center(0, 0, 1, 1) == Rect(-1.0, -1.0, 2.0, 2.0)


def test_rect_from_center_is_centred():
    cx, cy, rx, ry = 12.0, -3.0, 4.0, 2.5
    rect = Rect.from_center(cx, cy, rx, ry)
    assert rect.x + rect.width / 2 == cx
    assert rect.y + rect.height / 2 == cy
    assert rect.width == 2 * rx
    assert rect.height == 2 * ry


def test_color_defaults_opaque_black():
    assert Color() == Color(0, 0, 0, 1)


def test_stroke_defaults():
    stroke = Stroke()
    assert stroke.width == 1.0
    assert stroke.color == Color()


def test_stroke_colors_not_shared():
    first, second = Stroke(), Stroke()
    first.color.r = 255
    assert second.color.r == 0