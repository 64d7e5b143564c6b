"""Fill and stroke rewriting for single-color icon rendering."""

import re

from .geometry import BoundingBox, is_secondary, resolve_box
from .markup import MarkupNode

CURRENT_COLOR = "currentColor"
SECONDARY_OPACITY = "0.3"

WHITE_COLORS = frozenset(
    ["white", "#fff", "#ffffff", "rgb(255,255,255)", "rgba(255,255,255,1)"]
)

TRANSPARENT_STROKES = frozenset(["transparent", "rgba(0,0,0,0)"])

# Tags that never paint by themselves and must not receive a synthesized fill
NON_PAINTING_TAGS = frozenset(
    [
        "defs",
        "clipPath",
        "mask",
        "pattern",
        "linearGradient",
        "radialGradient",
        "filter",
        "g",
    ]
)

_SPACE_RE = re.compile(r"\s+")


def _color_key(color: str) -> str:
    return _SPACE_RE.sub("", color).lower()


def is_white_color(color: str) -> bool:
    """Check if a color value is white, ignoring case and whitespace.

    Example:
        >>> is_white_color("RGB(255, 255, 255)")
        True
    """
    return _color_key(color) in WHITE_COLORS


def is_transparent_stroke(color: str) -> bool:
    """Check if a stroke value is one of the fully transparent synonyms."""
    return _color_key(color) in TRANSPARENT_STROKES


def has_white_colors_for_contrast(node: MarkupNode) -> bool:
    """Check if any element in the tree has a white fill or stroke."""
    for element in node.iter():
        for name in ("fill", "stroke"):
            value = element.get(name)
            if value is not None and is_white_color(value):
                return True
    return False


def _paint(attributes: dict[str, str], secondary: bool) -> None:
    attributes["fill"] = CURRENT_COLOR
    if secondary:
        attributes["opacity"] = SECONDARY_OPACITY


def rewrite_colors(
    node: MarkupNode,
    document_box: BoundingBox,
    parent_fill_is_none: bool = False,
    preserve_contrast: bool = False,
) -> MarkupNode:
    """Rewrite fill and stroke of a tree to follow currentColor.

    Args:
        node: Root of the subtree to rewrite.
        document_box: Box of the canonicalized document, used to classify
            background shapes.
        parent_fill_is_none: Whether an ancestor has fill="none".
        preserve_contrast: Keep white fills and strokes unchanged.

    Returns:
        A rewritten copy of the subtree.
    """
    secondary = is_secondary(resolve_box(node), document_box)
    attributes = dict(node.attributes)

    fill = attributes.get("fill")
    fill_is_none = fill is not None and fill.strip().lower() == "none"

    if fill is not None:
        if not fill_is_none and not (preserve_contrast and is_white_color(fill)):
            _paint(attributes, secondary)
    elif (
        not parent_fill_is_none
        and "stroke" not in attributes
        and node.tag not in NON_PAINTING_TAGS
    ):
        # Implicit black fill
        _paint(attributes, secondary)

    stroke = attributes.get("stroke")
    if stroke is not None:
        if is_transparent_stroke(stroke):
            attributes["stroke"] = "none"
        elif stroke.strip().lower() != "none":
            if not (preserve_contrast and is_white_color(stroke)) and not secondary:
                attributes["stroke"] = CURRENT_COLOR

    return MarkupNode(
        tag=node.tag,
        attributes=attributes,
        children=[
            rewrite_colors(
                child,
                document_box,
                parent_fill_is_none=fill_is_none or parent_fill_is_none,
                preserve_contrast=preserve_contrast,
            )
            for child in node.children
        ],
        text=node.text,
    )
