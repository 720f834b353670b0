"""Read an SVG document into a scene graph of shapes and groups."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from os import PathLike

from svgscene.attributes import _leading_float, iter_attributes
from svgscene.geometry import Color, Stroke
from svgscene.gradient import LinearGradient, Stop
from svgscene.path_data import Path
from svgscene.shapes import Circle, Ellipse, Group, Line, Shape

_SHAPES: dict[str, type[Shape]] = {
    "circle": Circle,
    "ellipse": Ellipse,
    "line": Line,
    "path": Path,
}

_PROPERTY_CHARS = str.maketrans({"/": " ", "=": " ", "'": '"'})
_TAG_NAME = re.compile(r"\s*(\S*)")
_LIST_SEPARATORS = re.compile(r"[\s,]+")
_TRANSPARENT = ("none", "transparent")


def _opacity(value: str | float) -> float:
    return _leading_float(value) if isinstance(value, str) else float(value)


class ColorTable:
    """Named colours, looked up case-insensitively; ``none`` is always present."""

    def __init__(self, colors: Mapping[str, Color] | None = None) -> None:
        self._colors: dict[str, Color] = dict(colors or {})
        self._colors["none"] = Color(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> ColorTable:
        """Build a table from lines such as ``alice blue #F0F8FF``.

        The words before the hex code are joined without spaces to form the
        name. Blank lines are skipped.
        """
        colors: dict[str, Color] = {}
        for line in lines:
            tokens = line.split()
            if not tokens:
                continue
            code = tokens[-1]
            colors["".join(tokens[:-1])] = Color(
                int(code[1:3], 16), int(code[3:5], 16), int(code[5:7], 16)
            )
        return cls(colors)

    @classmethod
    def load(cls, path: str | PathLike[str]) -> ColorTable:
        """Read a colour table file."""
        with open(path, encoding="utf-8") as handle:
            return cls.from_lines(handle)

    def __contains__(self, name: object) -> bool:
        return name in self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def resolve(self, text: str, opacity: str | float) -> Color:
        """Turn ``rgb(...)``, ``#rgb``, ``#rrggbb`` or a colour name into a colour.

        Unknown names give black. Raises ``ValueError`` for malformed values.
        """
        alpha = _opacity(opacity)
        if "rgb" in text:
            digits = re.sub(r"\D", " ", text).split()
            if len(digits) < 3:
                raise ValueError(f"rgb() needs three values: {text!r}")
            r, g, b = (min(float(d), 255.0) for d in digits[:3])
            return Color(r, g, b, alpha)
        if text.startswith("#"):
            if len(text) == 4:
                text = "#" + "".join(ch * 2 for ch in text[1:])
            return Color(
                int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16), alpha
            )
        base = self._colors.get(text.lower(), Color())
        return replace(base, opacity=alpha)


@dataclass
class DocumentInfo:
    """The parsed scene together with the viewport and view box of the document."""

    root: Group = field(default_factory=Group)
    view_x: float = 0.0
    view_y: float = 0.0
    view_width: float = 0.0
    view_height: float = 0.0
    preserved_form: str = ""
    preserved_mode: str = ""
    port_width: float = 0.0
    port_height: float = 0.0


class _Cursor:
    """Reads text piece by piece up to a delimiter, which is consumed."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def read_until(self, delim: str) -> str | None:
        if self._pos >= len(self._text):
            return None
        end = self._text.find(delim, self._pos)
        if end < 0:
            chunk, self._pos = self._text[self._pos:], len(self._text)
        else:
            chunk, self._pos = self._text[self._pos:end], end + 1
        return chunk


def _split_tag(chunk: str) -> tuple[str, str]:
    line = chunk + ">"
    match = _TAG_NAME.match(line)
    name = match.group(1)
    prop = line[match.end():].partition(">")[0]
    return name, prop.translate(_PROPERTY_CHARS)


def _gradient_ref(value: str) -> str:
    ident = value.partition("#")[2].partition(")")[0]
    return ident.rstrip(' "')


def _length(value: str) -> float:
    number = _leading_float(value)
    if "pt" in value:
        number *= 96.0 / 72.0
    elif "cm" in value:
        number *= 96.0 / 2.54
    return number


class _Build:
    """State of one pass over a document."""

    def __init__(self, parser: SvgParser) -> None:
        self.parser = parser
        self.info = DocumentInfo()
        self.current = self.info.root
        self.inherited = [" "]
        self.in_defs = False
        self.linear_open = False
        self.radial_open = False
        self.grad_id = ""
        self.grad_lines: list[str] = []
        self.gradients: dict[str, LinearGradient] = {}

    def run(self, text: str) -> DocumentInfo:
        cursor = _Cursor(text)
        while (chunk := cursor.read_until(">")) is not None:
            name, prop = _split_tag(chunk)
            if name == "<svg":
                self._svg(prop)
            if name == "<defs>":
                self.in_defs = True
            if self.in_defs:
                self._defs(name, prop)
            if "/def" in name:
                self.in_defs = False
            if "<g" in name:
                self._open_group(prop)
            elif "</g" in name:
                self._close_group()
            else:
                self._element(name[1:], prop, cursor)
        return self.info

    def _svg(self, prop: str) -> None:
        info = self.info
        for attr, value in iter_attributes(prop):
            if attr == "viewBox":
                numbers = [t for t in _LIST_SEPARATORS.split(value) if t]
                if len(numbers) < 4:
                    raise ValueError(f"viewBox needs four numbers: {value!r}")
                (info.view_x, info.view_y, info.view_width, info.view_height) = (
                    _leading_float(n) for n in numbers[:4]
                )
            elif attr == "preserveAspectRatio":
                words = value.split() + ["", ""]
                info.preserved_form, info.preserved_mode = words[0], words[1]
            elif attr == "width":
                info.port_width = _length(value)
            elif attr == "height":
                info.port_height = _length(value)

    def _take_id(self, prop: str) -> str:
        if "id" not in prop:
            return prop
        _, _, rest = prop.partition('"')
        self.grad_id, _, remainder = rest.partition('"')
        return remainder

    def _defs(self, name: str, prop: str) -> None:
        if name == "<linearGradient":
            self.linear_open = True
        elif name == "<radialGradient":
            self.radial_open = True

        close_radial = False
        if self.linear_open:
            self.grad_lines.append(self._take_id(prop))
        elif self.radial_open and "id" in prop:
            close_radial = "xlink:href" in self._take_id(prop)

        if "/linearGradient" in name and self.linear_open:
            self.linear_open = False
            self._store_linear()
        if "/radialGradient" in name or close_radial:
            # Radial gradients are not supported; their definition is skipped.
            self.radial_open = False
            self.grad_id = ""
            self.grad_lines.clear()

    def _store_linear(self) -> None:
        gradient = LinearGradient(line=self.grad_lines[0])
        gradient.update_element()
        for line in self.grad_lines[1:-1]:
            stop = Stop()
            color_text, opacity_text = "", "1"
            for attr, value in iter_attributes(line):
                if attr == "stop-color":
                    color_text = value
                elif attr == "stop-opacity":
                    opacity_text = value
                elif attr == "offset":
                    stop.offset = _leading_float(value)
            if color_text in _TRANSPARENT:
                opacity_text = "0"
            stop.color = self.parser.colors.resolve(color_text, opacity_text)
            gradient.add_stop(stop)
        if self.grad_id not in self.gradients:
            gradient.grad_id = 1
            self.gradients[self.grad_id] = gradient
        self.grad_id = ""
        self.grad_lines.clear()

    def _open_group(self, prop: str) -> None:
        self.inherited.append(f" {self.inherited[-1]} {prop} ")
        group = Group(name="g", parent=self.current)
        self.current.add_shape(group)
        self.current = group

    def _close_group(self) -> None:
        if self.current.parent is None:
            raise ValueError("closing </g> without a matching <g>")
        if self.inherited:
            self.inherited.pop()
        self.current = self.current.parent

    def _element(self, name: str, prop: str, cursor: _Cursor) -> None:
        text_content = ""
        if name == "text":
            text_content = cursor.read_until("<") or ""
            cursor.read_until(">")
        kind = _SHAPES.get(name)
        if kind is None:
            return
        if self.inherited:
            prop = f" {self.inherited[-1]} {prop} "
        shape = kind()
        self.parser._apply(shape, name, prop, text_content, self.gradients)
        self.current.add_shape(shape)


class SvgParser:
    """Parses SVG text into a :class:`DocumentInfo` holding the shape tree."""

    def __init__(self, colors: ColorTable | None = None) -> None:
        self.colors = colors if colors is not None else ColorTable()

    def _apply(
        self,
        shape: Shape,
        name: str,
        prop: str,
        text_name: str,
        gradients: Mapping[str, LinearGradient],
    ) -> None:
        shape.name = name
        shape.text_name = text_name
        shape.line = prop

        values = {
            "stroke-width": "1",
            "stroke": "",
            "stroke-opacity": "1",
            "fill": "",
            "fill-opacity": "1",
        }
        transform = ""
        is_gradient = False

        def take(attr: str, value: str) -> None:
            nonlocal is_gradient
            if attr == "fill" and "url" in value:
                is_gradient = True
                value = _gradient_ref(value)
            values[attr] = value

        for attr, value in iter_attributes(prop):
            if attr == "style":
                for entry in value.split(";"):
                    key, colon, sub = entry.partition(":")
                    if colon and key.strip() in values:
                        take(key.strip(), sub.strip())
            elif attr == "transform":
                transform += f" {value} "
            elif attr in values:
                take(attr, value)

        if is_gradient:
            gradient = gradients.get(values["fill"])
            if gradient is not None:
                gradient.grad_id = 1
                shape.gradient = gradient
        else:
            fill = values["fill"]
            fill_opacity = "0" if fill in _TRANSPARENT else values["fill-opacity"]
            shape.color = self.colors.resolve(fill, fill_opacity)
            outline = values["stroke"]
            stroke_opacity = (
                "0" if outline in _TRANSPARENT or not outline else values["stroke-opacity"]
            )
            shape.stroke = Stroke(
                self.colors.resolve(outline, stroke_opacity),
                _leading_float(values["stroke-width"]),
            )

        shape.update_property()
        if transform:
            shape.update_transform(transform)

    def parse_text(self, text: str) -> DocumentInfo:
        """Parse SVG source text."""
        return _Build(self).run(text)

    def parse_file(self, path: str | PathLike[str]) -> DocumentInfo:
        """Read and parse an SVG file."""
        with open(path, encoding="utf-8") as handle:
            return self.parse_text(handle.read())