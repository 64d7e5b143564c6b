"""Rescale SVG documents into the canonical 24x24 coordinate space."""

from .geometry import format_number, parse_viewbox, resolve_length
from .markup import MarkupNode

CANONICAL_SIZE = 24.0
CANONICAL_VIEWBOX = "0 0 24 24"


def current_viewbox(root: MarkupNode) -> tuple[float, float, float, float] | None:
    """Get the current coordinate box of a document.

    The viewBox is used when present; otherwise the box spans
    (0, 0, width, height).

    Returns:
        (min_x, min_y, width, height), or None if it cannot be resolved.
    """
    if root.has("viewBox"):
        return parse_viewbox(root.get("viewBox"))

    width = resolve_length(root.get("width"))
    height = resolve_length(root.get("height"))
    if width is None or height is None:
        return None
    return (0.0, 0.0, width, height)


def canonical_transform(width: float, height: float) -> str:
    """Build the transform that maps a box into the canonical square.

    The content is scaled to fit and centered along the shorter side. The
    box origin does not take part in the offset.
    """
    scale = CANONICAL_SIZE / max(width, height)
    offset_x = (CANONICAL_SIZE - width * scale) / 2
    offset_y = (CANONICAL_SIZE - height * scale) / 2
    return (
        f"translate({format_number(offset_x)} {format_number(offset_y)}) "
        f"scale({format_number(scale)})"
    )


def canonicalize_geometry(root: MarkupNode) -> MarkupNode:
    """Return a copy of the document rescaled into the 0 0 24 24 box.

    All children are moved, in order, into one group carrying the
    translate+scale transform. Documents already at 0 0 24 24 and documents
    whose box cannot be resolved are returned unchanged (as a copy).
    """
    result = root.copy()

    box = current_viewbox(root)
    if box is None:
        return result

    min_x, min_y, width, height = box
    if (min_x, min_y, width, height) == (0.0, 0.0, CANONICAL_SIZE, CANONICAL_SIZE):
        return result
    if max(width, height) <= 0:
        return result

    group = MarkupNode(
        tag="g",
        attributes={"transform": canonical_transform(width, height)},
        children=result.children,
    )
    result.children = [group]
    result.attributes["viewBox"] = CANONICAL_VIEWBOX
    result.attributes["width"] = format_number(CANONICAL_SIZE)
    result.attributes["height"] = format_number(CANONICAL_SIZE)
    return result
