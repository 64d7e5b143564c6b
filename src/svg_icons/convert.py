"""SVG to Blade icon conversion pipeline.

Each icon goes through:
    parse -> normalize attributes -> canonicalize geometry -> recolor -> serialize

and the resulting artifacts are assembled into one combined component or
one component per icon.
"""

import re
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable
from xml.etree import ElementTree as ET

import yaml

from .assemble import (
    BLADE_EXTENSION,
    IconArtifact,
    OutputShape,
    TemplateName,
    collect_preserved_attributes,
    component_file_name,
    render_component,
    render_single_file,
)
from .canonicalize import canonicalize_geometry
from .geometry import format_number, resolve_document_box
from .markup import MarkupNode, normalize_attributes, parse_markup, serialize_inner
from .optimize import Optimizer, OptimizerError
from .recolor import has_white_colors_for_contrast, rewrite_colors

SVG_EXTENSION = ".svg"

OUTPUT_SHAPES: tuple[OutputShape, ...] = ("single", "multiple")
TEMPLATES: tuple[TemplateName, ...] = ("plain", "variant")

INLINE_SOURCE = "<inline>"

ProgressCallback = Callable[[Path], None]


@dataclass
class NormalizationConfig:
    """Conversion options.

    preserve_contrast is None for auto-detection: white colors are kept
    whenever the icon contains any.
    """

    canonicalize_geometry: bool = True
    preserve_contrast: bool | None = None
    output_shape: OutputShape = "single"
    template: TemplateName = "plain"
    optimize: bool = True
    workers: int = 1
    file_name: str = "icons"


@dataclass
class IconResult:
    """Outcome of converting one icon."""

    source: str
    artifact: IconArtifact
    warnings: list[str] = field(default_factory=list)


@dataclass
class FileFailure:
    """A source file that could not be converted."""

    path: Path
    reason: str


@dataclass
class ConversionReport:
    """Complete batch conversion report."""

    input_path: Path
    results: list[IconResult] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    optimizer_unavailable: bool = False

    @property
    def artifacts(self) -> list[IconArtifact]:
        """Converted artifacts in processing order."""
        return [result.artifact for result in self.results]

    @property
    def has_errors(self) -> bool:
        """Check if any file failed to convert."""
        return len(self.failures) > 0

    @property
    def total_warnings(self) -> int:
        """Number of warnings across all icons."""
        return sum(len(result.warnings) for result in self.results)


def validate_config(config: NormalizationConfig) -> None:
    """Check a configuration for invalid combinations.

    Raises:
        ValueError: If the configuration is invalid.
    """
    if config.output_shape not in OUTPUT_SHAPES:
        raise ValueError(
            f"Invalid output_shape '{config.output_shape}'. "
            f"Valid values: {', '.join(OUTPUT_SHAPES)}"
        )
    if config.template not in TEMPLATES:
        raise ValueError(
            f"Invalid template '{config.template}'. Valid values: {', '.join(TEMPLATES)}"
        )
    if config.template == "variant" and config.output_shape == "single":
        raise ValueError("The variant template requires output_shape 'multiple'")
    if config.workers < 1:
        raise ValueError(f"workers must be at least 1, got {config.workers}")
    if not to_kebab_case(config.file_name):
        raise ValueError("file_name must not be empty")


def parse_preserve_contrast(value: object) -> bool | None:
    """Parse a preserve_contrast setting (auto, true or false).

    Raises:
        ValueError: If the value is not recognized.
    """
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == "auto":
        return None
    if text in ("true", "yes", "on"):
        return True
    if text in ("false", "no", "off"):
        return False
    raise ValueError(f"Invalid preserve_contrast value: {value}")


def parse_config(data: dict) -> NormalizationConfig:
    """Build a configuration from a dictionary.

    Raises:
        ValueError: If a value is invalid.
    """
    config = NormalizationConfig()

    if "canonicalize_geometry" in data:
        config.canonicalize_geometry = bool(data["canonicalize_geometry"])
    if "preserve_contrast" in data:
        config.preserve_contrast = parse_preserve_contrast(data["preserve_contrast"])
    if "output_shape" in data:
        config.output_shape = str(data["output_shape"])  # type: ignore
    if "template" in data:
        config.template = str(data["template"])  # type: ignore
    if "optimize" in data:
        config.optimize = bool(data["optimize"])
    if "workers" in data:
        config.workers = int(data["workers"])
    if "file_name" in data:
        config.file_name = str(data["file_name"])

    validate_config(config)
    return config


def parse_config_file(config_path: Path) -> NormalizationConfig:
    """Parse a YAML configuration file.

    Example file:
        output_shape: multiple
        template: variant
        preserve_contrast: auto
        workers: 4

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the configuration is invalid.
    """
    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Config file must be a YAML dictionary")

    return parse_config(data)


def to_kebab_case(value: str) -> str:
    """Convert an icon or file name to kebab-case.

    Example:
        >>> to_kebab_case("Arrow Left (2)")
        'arrow-left2'
        >>> to_kebab_case("ChevronDown")
        'chevron-down'
    """
    value = re.sub(r"[()]", "", value.strip())
    value = re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), value)
    value = re.sub(r"\s+", "", value)
    value = re.sub(r"(.)(?=[A-Z])", r"\1-", value)
    return value.lower()


def document_viewbox(root: MarkupNode, width: float | None, height: float | None) -> str:
    """ViewBox string of a document, derived from its size when missing."""
    viewbox = root.get("viewBox")
    if viewbox:
        return viewbox
    return f"0 0 {format_number(width or 0)} {format_number(height or 0)}"


def convert_svg_tree(
    root: MarkupNode, name: str, config: NormalizationConfig
) -> IconArtifact:
    """Normalize one parsed SVG document into an icon artifact.

    Args:
        root: Parsed document root (left unmodified).
        name: Kebab-case icon name.
        config: Conversion options.

    Returns:
        The icon artifact.
    """
    root = normalize_attributes(root)
    if config.canonicalize_geometry:
        root = canonicalize_geometry(root)

    document_box = resolve_document_box(root)
    preserved = collect_preserved_attributes(root.attributes)

    preserve_contrast = config.preserve_contrast
    if preserve_contrast is None:
        preserve_contrast = has_white_colors_for_contrast(root)

    recolored = rewrite_colors(root, document_box, preserve_contrast=preserve_contrast)

    return IconArtifact(
        name=name,
        inner_markup=serialize_inner(recolored),
        viewbox=document_viewbox(root, document_box.width, document_box.height),
        width=document_box.width,
        height=document_box.height,
        preserved_attributes=preserved,
    )


def optimize_markup(markup: str, optimizer: Optimizer) -> tuple[str, str | None]:
    """Run the optimizer on markup through a temporary file.

    Returns:
        Tuple of (markup, warning). On failure the original markup is
        returned with a warning message.
    """
    with tempfile.TemporaryDirectory(prefix="svg_icons_") as tmp_dir:
        tmp_path = Path(tmp_dir) / f"icon{SVG_EXTENSION}"
        tmp_path.write_text(markup, encoding="utf-8")
        try:
            optimizer.optimize(tmp_path)
        except OptimizerError as e:
            return markup, f"Optimization skipped: {e}"
        return tmp_path.read_text(encoding="utf-8"), None


def convert_svg_string(
    markup: str,
    name: str,
    config: NormalizationConfig,
    optimizer: Optimizer | None = None,
    source: str = INLINE_SOURCE,
) -> IconResult:
    """Convert raw SVG markup into an icon.

    Args:
        markup: SVG document text.
        name: Icon name, converted to kebab-case.
        config: Conversion options.
        optimizer: Optional external optimizer (best-effort).
        source: Label of the input used in reports.

    Raises:
        ET.ParseError: If the markup is not well-formed XML.
    """
    warnings: list[str] = []
    if optimizer is not None and config.optimize and optimizer.available:
        markup, warning = optimize_markup(markup, optimizer)
        if warning:
            warnings.append(warning)

    root = parse_markup(markup)
    artifact = convert_svg_tree(root, to_kebab_case(name), config)
    return IconResult(source=source, artifact=artifact, warnings=warnings)


def convert_svg_file(
    svg_path: Path,
    config: NormalizationConfig,
    optimizer: Optimizer | None = None,
) -> IconResult:
    """Convert an SVG file into an icon named after the file.

    The source file itself is never modified.

    Raises:
        OSError: If the file cannot be read.
        ET.ParseError: If the file is not valid XML.
    """
    markup = svg_path.read_text(encoding="utf-8-sig")
    return convert_svg_string(
        markup, svg_path.stem, config, optimizer=optimizer, source=str(svg_path)
    )


def iter_source_files(input_dir: Path) -> list[Path]:
    """All files below a directory, sorted by path."""
    return sorted(path for path in input_dir.rglob("*") if path.is_file())


def convert_directory(
    input_dir: Path,
    config: NormalizationConfig,
    optimizer: Optimizer | None = None,
    progress: ProgressCallback | None = None,
) -> ConversionReport:
    """Convert every SVG file below a directory.

    Non-SVG files are skipped; files that fail to parse (including documents
    nested too deeply to walk) are reported and do not stop the batch. With
    config.workers > 1 icons are converted in a thread pool, but results
    always follow sorted path order.

    Args:
        input_dir: Directory to scan recursively.
        config: Conversion options.
        optimizer: Optional external optimizer.
        progress: Called once per processed file, always from the calling
            thread and in sorted path order.

    Returns:
        ConversionReport with one result or failure per SVG file.
    """
    report = ConversionReport(input_path=input_dir)

    if optimizer is not None and config.optimize and not optimizer.available:
        report.optimizer_unavailable = True
        optimizer = None

    svg_files: list[Path] = []
    for path in iter_source_files(input_dir):
        if path.suffix == SVG_EXTENSION:
            svg_files.append(path)
        else:
            report.skipped.append(path)

    def _convert(path: Path) -> IconResult | FileFailure:
        try:
            return convert_svg_file(path, config, optimizer)
        except ET.ParseError as e:
            return FileFailure(path=path, reason=f"Invalid SVG: {e}")
        except (OSError, UnicodeDecodeError) as e:
            return FileFailure(path=path, reason=f"Cannot read file: {e}")
        except RecursionError:
            return FileFailure(path=path, reason="Invalid SVG: elements nested too deeply")

    def _record(path: Path, outcome: IconResult | FileFailure) -> None:
        if progress is not None:
            progress(path)
        if isinstance(outcome, FileFailure):
            report.failures.append(outcome)
        else:
            report.results.append(outcome)

    if config.workers > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            for path, outcome in zip(svg_files, executor.map(_convert, svg_files)):
                _record(path, outcome)
    else:
        for path in svg_files:
            _record(path, _convert(path))

    return report


def single_file_name(file_name: str) -> str:
    """Kebab-case output file name of the combined component."""
    if file_name.endswith(BLADE_EXTENSION):
        file_name = file_name[: -len(BLADE_EXTENSION)]
    return component_file_name(to_kebab_case(file_name))


def write_artifacts(
    artifacts: list[IconArtifact],
    output_dir: Path,
    config: NormalizationConfig,
) -> list[Path]:
    """Write components for a list of icons.

    The combined file is fully regenerated on each call.

    Returns:
        Paths of the written files.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    if config.output_shape == "single":
        output_file = output_dir / single_file_name(config.file_name)
        output_file.write_text(render_single_file(artifacts), encoding="utf-8")
        return [output_file]

    written: list[Path] = []
    for artifact in artifacts:
        output_file = output_dir / component_file_name(artifact.name)
        output_file.write_text(
            render_component(artifact, config.template), encoding="utf-8"
        )
        written.append(output_file)
    return written


def format_conversion_report(report: ConversionReport) -> str:
    """Format a conversion report as text.

    Args:
        report: Conversion report.

    Returns:
        Formatted text.
    """
    lines: list[str] = []
    lines.append(f"Input: {report.input_path}")
    lines.append("")

    if report.optimizer_unavailable:
        lines.append("[WARNING] Optimizer not available, icons were not optimized")
        lines.append("")

    if report.results:
        lines.append("Converted icons:")
        for result in report.results:
            lines.append(f"  {result.artifact.name} ({result.source})")
            for warning in result.warnings:
                lines.append(f"    [WARNING] {warning}")
        lines.append("")

    if report.failures:
        lines.append("Failed files:")
        for failure in report.failures:
            lines.append(f"  [ERROR] {failure.path}: {failure.reason}")
        lines.append("")

    if report.written:
        lines.append("Written files:")
        for path in report.written:
            lines.append(f"  {path}")
        lines.append("")

    lines.append("Summary:")
    lines.append(f"  Converted: {len(report.results)}")
    lines.append(f"  Skipped (not SVG): {len(report.skipped)}")
    lines.append(f"  Failed: {len(report.failures)}")
    lines.append(f"  Warnings: {report.total_warnings}")

    if report.has_errors:
        lines.append("")
        lines.append("*** SOME FILES COULD NOT BE CONVERTED ***")

    return "\n".join(lines)
