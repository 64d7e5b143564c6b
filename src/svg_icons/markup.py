"""In-memory markup model for SVG documents."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

# SVG namespace mappings
SVG_NAMESPACES = {
    "svg": "http://www.w3.org/2000/svg",
    "inkscape": "http://www.inkscape.org/namespaces/inkscape",
    "sodipodi": "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "xlink": "http://www.w3.org/1999/xlink",
    "xml": "http://www.w3.org/XML/1998/namespace",
}

_PREFIXES = {uri: prefix for prefix, uri in SVG_NAMESPACES.items()}

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class MarkupNode:
    """One XML element with ordered attributes and children."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["MarkupNode"] = field(default_factory=list)
    text: str | None = None

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get an attribute value."""
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        """Check if an attribute is present."""
        return name in self.attributes

    def copy(self) -> "MarkupNode":
        """Deep copy of this node and its subtree."""
        return MarkupNode(
            tag=self.tag,
            attributes=dict(self.attributes),
            children=[child.copy() for child in self.children],
            text=self.text,
        )

    def iter(self) -> Iterator["MarkupNode"]:
        """Iterate over this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()


def get_local_name(tag: str) -> str:
    """Extract local name from a namespaced tag.

    Example:
        >>> get_local_name("{http://www.w3.org/2000/svg}rect")
        'rect'
    """
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _qualified_name(name: str) -> str | None:
    """Convert an ElementTree name to the name written in markup.

    SVG-namespace names lose their namespace, known foreign namespaces
    get their conventional prefix (xlink:href). Returns None for names in
    any other namespace.
    """
    if not name.startswith("{"):
        return name
    uri = name[1:].split("}", 1)[0]
    local = get_local_name(name)
    prefix = _PREFIXES.get(uri)
    if prefix is None:
        return None
    if prefix == "svg":
        return local
    return f"{prefix}:{local}"


def from_element(element: ET.Element) -> MarkupNode:
    """Build a MarkupNode tree from an ElementTree element.

    Comments and processing instructions are dropped, tail text is discarded.
    Attributes in unknown namespaces (editor metadata such as sketch:type)
    are dropped so they cannot collide with plain attributes.
    """
    text = element.text if element.text and element.text.strip() else None
    tag = _qualified_name(element.tag) or get_local_name(element.tag)
    node = MarkupNode(tag=tag, text=text)
    for name, value in element.attrib.items():
        qualified = _qualified_name(name)
        if qualified is not None:
            node.attributes[qualified] = value
    for child in element:
        if not isinstance(child.tag, str):
            continue
        node.children.append(from_element(child))
    return node


def parse_markup(markup: str) -> MarkupNode:
    """Parse SVG markup into a MarkupNode tree.

    Raises:
        ET.ParseError: If the markup is not well-formed XML.
    """
    return from_element(ET.fromstring(markup))


def parse_markup_file(file_path: Path) -> MarkupNode:
    """Parse an SVG file into a MarkupNode tree.

    Raises:
        FileNotFoundError: If the file does not exist.
        ET.ParseError: If the file is not valid XML.
    """
    tree = ET.parse(file_path)
    return from_element(tree.getroot())


def normalize_whitespace(value: str) -> str:
    """Collapse whitespace runs to a single space and trim the ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def normalize_attributes(node: MarkupNode) -> MarkupNode:
    """Return a copy of the tree with every attribute value whitespace-normalized."""
    return MarkupNode(
        tag=node.tag,
        attributes={
            name: normalize_whitespace(value) for name, value in node.attributes.items()
        },
        children=[normalize_attributes(child) for child in node.children],
        text=node.text,
    )


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return escape(value, {'"': "&quot;"})


def serialize_node(node: MarkupNode) -> str:
    """Serialize a node and its subtree without any formatting whitespace."""
    parts = [f"<{node.tag}"]
    for name, value in node.attributes.items():
        parts.append(f' {name}="{escape_attribute(value)}"')

    if not node.children and node.text is None:
        parts.append("/>")
        return "".join(parts)

    parts.append(">")
    if node.text is not None:
        parts.append(escape(node.text))
    for child in node.children:
        parts.append(serialize_node(child))
    parts.append(f"</{node.tag}>")
    return "".join(parts)


def serialize_inner(node: MarkupNode) -> str:
    """Serialize the children of a node, excluding the node's own wrapper."""
    return "".join(serialize_node(child) for child in node.children)
