"""Geometry utilities for SVG dimension resolution and element classification."""

import math
import re
from dataclasses import dataclass

from .markup import MarkupNode

# Length token: optionally signed decimal with an optional px/pt/% suffix.
# Units are stripped, never converted.
LENGTH_RE = re.compile(r"^([+-]?(?:\d+(?:\.\d*)?|\.\d+))(px|pt|%)?$")

VIEWBOX_SEPARATOR_RE = re.compile(r"[\s,]+")

# Fraction of the document area above which a shape counts as background
SECONDARY_COVERAGE = 0.90


@dataclass
class BoundingBox:
    """Axis-aligned bounding box in viewBox units.

    width/height are None when the geometry cannot be derived (e.g. paths).
    """

    x: float
    y: float
    width: float | None
    height: float | None

    @property
    def is_resolved(self) -> bool:
        """Check if both dimensions are known."""
        return self.width is not None and self.height is not None

    @property
    def area(self) -> float | None:
        """Area of the box, or None if a dimension is unknown."""
        if not self.is_resolved:
            return None
        return self.width * self.height


def resolve_length(token: str | None) -> float | None:
    """Parse a length token to a float.

    Args:
        token: Attribute value such as "24", "24px", "1.5pt" or "50%".

    Returns:
        The numeric part, or None if the token is not a recognized length.

    Example:
        >>> resolve_length("24px")
        24.0
        >>> resolve_length("2em") is None
        True
    """
    if token is None:
        return None
    match = LENGTH_RE.match(token.strip())
    if match is None:
        return None
    return float(match.group(1))


def parse_viewbox(value: str | None) -> tuple[float, float, float, float] | None:
    """Parse a viewBox attribute into (min_x, min_y, width, height).

    Returns:
        The four numbers, or None if the value does not have exactly four
        finite numeric tokens.
    """
    if value is None:
        return None
    tokens = [t for t in VIEWBOX_SEPARATOR_RE.split(value.strip()) if t]
    if len(tokens) != 4:
        return None
    try:
        min_x, min_y, width, height = (float(t) for t in tokens)
    except ValueError:
        return None
    if not all(math.isfinite(v) for v in (min_x, min_y, width, height)):
        return None
    return (min_x, min_y, width, height)


def _length_or_zero(node: MarkupNode, name: str) -> float:
    value = resolve_length(node.get(name))
    return value if value is not None else 0.0


def resolve_box(node: MarkupNode) -> BoundingBox:
    """Resolve the effective bounding box of an element or document root.

    Explicit width/height win; when either is missing or zero the viewBox
    size is used instead. Circles and ellipses derive their box from
    their radii. Paths never have a known size.
    """
    x = _length_or_zero(node, "x")
    y = _length_or_zero(node, "y")
    width = resolve_length(node.get("width"))
    height = resolve_length(node.get("height"))

    if not width or not height:
        viewbox = parse_viewbox(node.get("viewBox"))
        if viewbox is not None:
            width, height = viewbox[2], viewbox[3]

    if node.tag == "circle":
        cx = _length_or_zero(node, "cx")
        cy = _length_or_zero(node, "cy")
        r = _length_or_zero(node, "r")
        return BoundingBox(cx - r, cy - r, r * 2, r * 2)

    if node.tag == "ellipse":
        cx = _length_or_zero(node, "cx")
        cy = _length_or_zero(node, "cy")
        rx = _length_or_zero(node, "rx")
        ry = _length_or_zero(node, "ry")
        return BoundingBox(cx - rx, cy - ry, rx * 2, ry * 2)

    if node.tag == "path":
        return BoundingBox(x, y, None, None)

    return BoundingBox(x, y, width, height)


def resolve_document_box(root: MarkupNode) -> BoundingBox:
    """Resolve the box of a document root.

    The origin comes from the viewBox when one is present, the size follows
    resolve_box().
    """
    box = resolve_box(root)
    viewbox = parse_viewbox(root.get("viewBox"))
    if viewbox is not None:
        box.x, box.y = viewbox[0], viewbox[1]
    return box


def is_secondary(element_box: BoundingBox, document_box: BoundingBox) -> bool:
    """Decide whether an element is a background (secondary) shape.

    Args:
        element_box: Resolved box of the element.
        document_box: Resolved box of the (canonicalized) document.

    Returns:
        True if the element covers at least 90% of the document area, or
        sits exactly at the origin with the document's full size.
    """
    if not element_box.is_resolved:
        return False

    document_area = document_box.area
    if not document_area:
        return False

    if element_box.area / document_area >= SECONDARY_COVERAGE:
        return True

    return (
        element_box.x == 0
        and element_box.y == 0
        and element_box.width == document_box.width
        and element_box.height == document_box.height
    )


def format_number(value: float) -> str:
    """Format a number for an attribute value.

    Uses 14 significant digits and drops trailing zeros.

    Example:
        >>> format_number(0.5)
        '0.5'
        >>> format_number(12.0)
        '12'
    """
    if value == 0:
        return "0"
    return f"{value:.14g}"
