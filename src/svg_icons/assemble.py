"""Blade component assembly for normalized icons.

Three output shapes are supported:
- single: one component with a @switch over icon names
- multiple: one self-contained component per icon
- variant: one component per icon with a variant-driven size class
"""

from dataclasses import dataclass, field
from typing import Literal

from .geometry import format_number
from .markup import escape_attribute

OutputShape = Literal["single", "multiple"]
TemplateName = Literal["plain", "variant"]

BLADE_EXTENSION = ".blade.php"

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Root attributes copied into every component. fill is kept only when "none".
PRESERVED_ATTRIBUTES = ("fill", "stroke-width", "overflow")

PLAIN_PROPS = "@props(['name' => null, 'default' => 'size-4'])"
PLAIN_MERGE = "{{ $attributes->merge(['class' => $default]) }}"

VARIANT_HEADER = (
    "@php $attributes = $unescapedForwardedAttributes ?? $attributes; @endphp\n\n"
    "@props([\n\t'variant' => 'outline',\n])\n\n"
    "@php\n"
    "$classes = Flux::classes('shrink-0')\n"
    "->add(match($variant) {\n"
    "\t'outline' => '[:where(&)]:size-6',\n"
    "\t'solid' => '[:where(&)]:size-6',\n"
    "\t'mini' => '[:where(&)]:size-5',\n"
    "\t'micro' => '[:where(&)]:size-4',\n"
    "});\n"
    "@endphp\n\n"
)
VARIANT_MERGE = "{{ $attributes->class($classes) }} data-flux-icon aria-hidden=\"true\""


@dataclass(frozen=True)
class IconArtifact:
    """One normalized icon ready for template assembly."""

    name: str
    inner_markup: str
    viewbox: str
    width: float | None
    height: float | None
    preserved_attributes: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def preserved_attributes_string(self) -> str:
        """Preserved root attributes as a string, each prefixed with a space."""
        return "".join(
            f' {name}="{escape_attribute(value)}"'
            for name, value in self.preserved_attributes
        )


def collect_preserved_attributes(attributes: dict[str, str]) -> tuple[tuple[str, str], ...]:
    """Pick the allow-listed root attributes in allow-list order.

    Args:
        attributes: Attributes of the document root.

    Returns:
        (name, value) pairs, with fill included only when its value is "none".
    """
    preserved: list[tuple[str, str]] = []
    for name in PRESERVED_ATTRIBUTES:
        if name not in attributes:
            continue
        value = attributes[name]
        if name == "fill" and value != "none":
            continue
        preserved.append((name, value))
    return tuple(preserved)


def render_svg_open(artifact: IconArtifact, merge_directive: str) -> str:
    """Render the opening <svg> tag of a component."""
    size = ""
    if artifact.width is not None:
        size += f' width="{format_number(artifact.width)}"'
    if artifact.height is not None:
        size += f' height="{format_number(artifact.height)}"'
    return (
        f'<svg xmlns="{SVG_NAMESPACE}"{size}'
        f"{artifact.preserved_attributes_string}"
        f' viewBox="{artifact.viewbox}" {merge_directive}>\n'
    )


def render_svg(artifact: IconArtifact, merge_directive: str) -> str:
    """Render the complete <svg> element of a component."""
    return (
        render_svg_open(artifact, merge_directive)
        + f"{artifact.inner_markup}\n</svg>\n"
    )


def render_plain_component(artifact: IconArtifact) -> str:
    """Render a self-contained component for one icon."""
    return f"{PLAIN_PROPS}\n\n" + render_svg(artifact, PLAIN_MERGE)


def render_variant_component(artifact: IconArtifact) -> str:
    """Render a variant-aware component for one icon."""
    return VARIANT_HEADER + render_svg(artifact, VARIANT_MERGE)


def render_component(artifact: IconArtifact, template: TemplateName = "plain") -> str:
    """Render a per-icon component with the chosen template."""
    if template == "variant":
        return render_variant_component(artifact)
    return render_plain_component(artifact)


def component_file_name(name: str) -> str:
    """File name of a component."""
    return f"{name}{BLADE_EXTENSION}"


class AssemblerStateError(RuntimeError):
    """Raised when the single-file assembler is used out of order."""


AssemblerState = Literal["uninitialized", "open", "closed"]


class SingleFileAssembler:
    """Builds one component that switches over icon names.

    The assembler moves through uninitialized -> open -> closed. Icons can
    only be appended while open. Duplicate names are not detected.

    Example:
        >>> assembler = SingleFileAssembler()
        >>> assembler.initialize()
        >>> assembler.append(artifact)
        >>> text = assembler.finalize()
    """

    def __init__(self) -> None:
        self.state: AssemblerState = "uninitialized"
        self._parts: list[str] = []
        self.names: list[str] = []

    def initialize(self) -> None:
        """Write the header and open the switch."""
        if self.state != "uninitialized":
            raise AssemblerStateError(f"Cannot initialize assembler in state '{self.state}'")
        self._parts.append(f"{PLAIN_PROPS}\n@switch($name)\n")
        self.state = "open"

    def append(self, artifact: IconArtifact) -> None:
        """Add one case block for an icon."""
        if self.state != "open":
            raise AssemblerStateError(f"Cannot append to assembler in state '{self.state}'")
        self._parts.append(f"@case('{artifact.name}')\n")
        self._parts.append(render_svg(artifact, PLAIN_MERGE))
        self._parts.append("@break\n")
        self.names.append(artifact.name)

    def finalize(self) -> str:
        """Close the switch and return the complete component text."""
        if self.state != "open":
            raise AssemblerStateError(f"Cannot finalize assembler in state '{self.state}'")
        self._parts.append("@endswitch\n")
        self.state = "closed"
        return "".join(self._parts)


def render_single_file(artifacts: list[IconArtifact]) -> str:
    """Render all icons into one switch component."""
    assembler = SingleFileAssembler()
    assembler.initialize()
    for artifact in artifacts:
        assembler.append(artifact)
    return assembler.finalize()
