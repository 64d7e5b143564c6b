"""SVG Icons - Normalize SVG icons into recolorable Blade components."""

__version__ = "0.1.0"

from .assemble import (
    AssemblerStateError,
    IconArtifact,
    SingleFileAssembler,
    render_component,
    render_single_file,
)
from .canonicalize import canonicalize_geometry
from .convert import (
    ConversionReport,
    FileFailure,
    IconResult,
    NormalizationConfig,
    convert_directory,
    convert_svg_file,
    convert_svg_string,
    convert_svg_tree,
    format_conversion_report,
    parse_config_file,
    to_kebab_case,
    write_artifacts,
)
from .geometry import BoundingBox, is_secondary, resolve_box, resolve_length
from .markup import MarkupNode, normalize_attributes, parse_markup
from .optimize import OptimizerError, SvgoOptimizer
from .recolor import has_white_colors_for_contrast, rewrite_colors

__all__ = [
    # Markup
    "MarkupNode",
    "normalize_attributes",
    "parse_markup",
    # Geometry
    "BoundingBox",
    "is_secondary",
    "resolve_box",
    "resolve_length",
    "canonicalize_geometry",
    # Colors
    "has_white_colors_for_contrast",
    "rewrite_colors",
    # Assembly
    "AssemblerStateError",
    "IconArtifact",
    "SingleFileAssembler",
    "render_component",
    "render_single_file",
    # Optimizer
    "OptimizerError",
    "SvgoOptimizer",
    # Pipeline
    "ConversionReport",
    "FileFailure",
    "IconResult",
    "NormalizationConfig",
    "convert_directory",
    "convert_svg_file",
    "convert_svg_string",
    "convert_svg_tree",
    "format_conversion_report",
    "parse_config_file",
    "to_kebab_case",
    "write_artifacts",
]
