"""Parse simple SVG documents into shapes, linear gradients and path outlines."""

__version__ = "0.1.0"

__all__ = [
    "attributes",
    "geometry",
    "gradient",
    "shapes",
    "path_data",
    "path_geometry",
    "parser",
]