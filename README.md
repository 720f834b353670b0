# svgscene

`svgscene` reads simple SVG documents and turns them into a tree of shape
objects. It resolves fill and stroke colours and linear gradients, and it turns
path data into outlines made of line and cubic Bézier segments. The result can
be drawn by whatever graphics backend you use.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Parsing a document

```python
from svgscene.parser import ColorTable, SvgParser

colors = ColorTable.from_lines(["red #FF0000", "black #000000"])
parser = SvgParser(colors)
info = parser.parse_text(
    '<svg width="200" height="100" viewBox="0 0 200 100">'
    '<circle cx="50" cy="50" r="40" fill="red" stroke="black"/>'
    '</svg>'
)

for shape in info.root:
    print(type(shape).__name__, shape.color, shape.stroke)
```

`SvgParser.parse_text(text)` returns a `DocumentInfo`. Its `root` is a `Group`
holding the parsed shapes. It also records `port_width` and `port_height`
(from `width` and `height`, with `pt` and `cm` converted to pixels at 96 per
inch), `view_x`, `view_y`, `view_width` and `view_height` (from `viewBox`),
and `preserved_form` and `preserved_mode` (from `preserveAspectRatio`).
`SvgParser.parse_file(path)` reads a UTF-8 file and parses it the same way.

The parser builds `circle`, `ellipse`, `line` and `path` elements. `<g>`
elements become nested `Group`s. Attributes written on a group are passed down
to the shapes inside it. Each shape takes its `fill`, `fill-opacity`,
`stroke`, `stroke-width`, `stroke-opacity` and `transform`, either as
attributes or from a `style` attribute. A fill of `url(#id)` links the shape to
a `<linearGradient>` declared inside `<defs>`. The gradient's stops are read
from its `<stop>` children.

### Colours

Named colours come from a `ColorTable`. Build one with
`ColorTable.from_lines(lines)`, where each line gives a colour name followed by
a `#rrggbb` code (the words of a name are joined without spaces), or with
`ColorTable.load(path)`. Names are looked up in lower case. `none` is always
present and is fully transparent. A parser made without a table knows only
`none`, so unknown names resolve to black.

`ColorTable.resolve(text, opacity)` turns `rgb(...)`, `#rgb`, `#rrggbb` or a
name into a `Color`. Its channels run 0–255 and its opacity 0–1; `rgb` values
are capped at 255. A malformed value raises `ValueError`.

## Geometry

`svgscene.geometry` provides the following dataclasses:

- `Point`, with `x`, `y` and an `intersect` flag that is ignored in equality.
- `Rect`, with `x`, `y`, `width` and `height`, plus `Rect.from_center(cx, cy, rx, ry)`.
- `Color`.
- `Stroke`, with `color` and `width`; the width defaults to 1.

## Shapes

`svgscene.shapes` provides `Shape`, `Circle`, `Ellipse`, `Line` and `Group`.
Every shape keeps the following:

- `name` and `text_name`.
- `line`, its raw attribute text.
- Its fill `color` and its `stroke`.
- An optional `gradient`.
- `transforms`, a list of `(name, values)` pairs. `Shape.update_transform(text)` appends to this list.

`update_property()` reads each kind's geometry from `line`. `Circle` and
`Ellipse` report their bounding box through `bounds()`. A `Group` can be
iterated, has a length, and takes children through `add_shape(shape)`.

## Gradients

`svgscene.gradient` provides `Stop`, `GradientUnits`, `GradientType`, the
abstract `Gradient` and `LinearGradient`. `LinearGradient.update_element()`
reads the following from the gradient's attribute text:

- `x1`, `y1`, `x2` and `y2`; percentages become fractions through `parse_svg_value`.
- `gradientUnits`.
- `gradientTransform`.

`LinearGradient.brush(bounds)` resolves the gradient against a shape's `Rect`
and returns a `LinearBrush`:

- In `objectBoundingBox` units, the vector and the translations are mapped into the box.
- Stops at offsets 0 and 1 are added when missing.
- A gradient with no stops raises `ValueError`.

## Paths

`svgscene.path_data.parse_path_data(text)` turns an SVG `d` string into a list
of `PathCommand` values. Each command keeps its letter and holds absolute
coordinates. `normalize_path_data(text)` rewrites path data with single spaces
between commands and numbers. Data that is empty, does not start with a moveto,
or holds stray characters raises `ValueError`. The `Path` shape reads `d`,
`stroke-linejoin` and `stroke-linecap` in `update_property()`.

`svgscene.path_geometry.build_outline(commands, has_gradient)` turns commands
into an `Outline`. An outline is made of figures of `LineTo` and `CubicTo`
segments, each figure closed or open. `Outline.bounds()` gives the exact
bounding rectangle. `arc_to_beziers(start, rx, ry, x_axis_rotation, large_arc,
sweep, end)` approximates an elliptical arc with cubic segments of at most a
quarter turn each.

## Attribute helpers

`svgscene.attributes.iter_attributes(text)` yields `(name, value)` pairs from
attribute text whose values are double-quoted. `parse_transform(text)` returns
the transform list used by shapes and gradients. It understands `translate`,
`rotate`, `scale` and `matrix`, and raises `ValueError` when a transform has
too few values.

## What it does not do

- It does not draw or rasterise anything. It only builds the scene, the colours, the brushes and the outlines for a renderer to use.
- Radial gradients are skipped. A shape filled with one keeps its default colour.
- `rect`, `polyline`, `polygon`, `text` and other elements produce no shapes.
- There is no command-line program and no viewer window.