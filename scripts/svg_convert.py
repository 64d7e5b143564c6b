#!/usr/bin/env python3
"""Convert SVG icons into recolorable Blade components."""

import argparse
import sys
from pathlib import Path
from xml.etree import ElementTree as ET

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_icons.convert import (
    ConversionReport,
    NormalizationConfig,
    convert_directory,
    convert_svg_string,
    format_conversion_report,
    parse_config_file,
    validate_config,
    write_artifacts,
)
from svg_icons.optimize import SvgoOptimizer


def build_config(args: argparse.Namespace) -> NormalizationConfig:
    """Build the configuration from the config file and command-line flags.

    Flags given on the command line override the config file.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    config = parse_config_file(args.config) if args.config else NormalizationConfig()

    if args.variant:
        config.template = "variant"
        if args.mode is None:
            config.output_shape = "multiple"
    if args.mode is not None:
        config.output_shape = args.mode
    if args.preserve_contrast is not None:
        config.preserve_contrast = args.preserve_contrast
    if args.no_canonicalize:
        config.canonicalize_geometry = False
    if args.no_optimize:
        config.optimize = False
    if args.workers is not None:
        config.workers = args.workers
    if args.file_name is not None:
        config.file_name = args.file_name

    validate_config(config)
    return config


def main() -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: I/O error or files that could not be converted
        - 2: Configuration or argument error
    """
    parser = argparse.ArgumentParser(
        description="Convert SVG icons into recolorable Blade components.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One component switching over all icons in a directory
  %(prog)s icons/ --output resources/views/components --file-name icons

  # One component per icon
  %(prog)s icons/ --output resources/views/components/icon --mode multiple

  # Variant-aware components
  %(prog)s icons/ --output resources/views/flux/icon --variant

  # Inline markup
  %(prog)s '<svg viewBox="0 0 48 48">...</svg>' --inline --name star -o out/
""",
    )
    parser.add_argument(
        "input", type=str, help="Directory of SVG files, or raw markup with --inline"
    )
    parser.add_argument(
        "--output", "-o", type=Path, required=True, help="Output directory"
    )
    parser.add_argument("--config", "-c", type=Path, help="YAML config file")
    parser.add_argument(
        "--mode",
        "-m",
        choices=["single", "multiple"],
        help="Single combined component or one component per icon",
    )
    parser.add_argument(
        "--variant", action="store_true", help="Use the variant-aware template"
    )
    contrast = parser.add_mutually_exclusive_group()
    contrast.add_argument(
        "--preserve-contrast",
        dest="preserve_contrast",
        action="store_const",
        const=True,
        help="Always keep white colors",
    )
    contrast.add_argument(
        "--no-preserve-contrast",
        dest="preserve_contrast",
        action="store_const",
        const=False,
        help="Never keep white colors (default: auto-detect)",
    )
    parser.add_argument(
        "--inline", action="store_true", help="Treat INPUT as raw SVG markup"
    )
    parser.add_argument("--name", type=str, help="Icon name for --inline input")
    parser.add_argument(
        "--file-name", type=str, help="Name of the combined component (single mode)"
    )
    parser.add_argument(
        "--no-canonicalize",
        action="store_true",
        help="Keep the original viewBox instead of rescaling to 24x24",
    )
    parser.add_argument(
        "--no-optimize", action="store_true", help="Skip SVGO optimization"
    )
    parser.add_argument(
        "--workers", "-j", type=int, help="Number of icons converted concurrently"
    )

    args = parser.parse_args()

    try:
        config = build_config(args)
    except Exception as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 2

    optimizer = SvgoOptimizer() if config.optimize else None

    if args.inline:
        if not args.name:
            print("Error: --name is required with --inline", file=sys.stderr)
            return 2
        report = ConversionReport(input_path=Path("<inline>"))
        try:
            report.results.append(
                convert_svg_string(args.input, args.name, config, optimizer=optimizer)
            )
        except ET.ParseError as e:
            print(f"Error: Failed to process the SVG content: {e}", file=sys.stderr)
            return 1
        except RecursionError:
            print("Error: SVG elements are nested too deeply", file=sys.stderr)
            return 1
    else:
        input_dir = Path(args.input)
        if not input_dir.is_dir():
            print(f"Error: Input directory not found: {input_dir}", file=sys.stderr)
            return 1

        svg_count = sum(1 for path in input_dir.rglob("*.svg") if path.is_file())
        processed = 0

        def show_progress(path: Path) -> None:
            nonlocal processed
            processed += 1
            print(f"[{processed}/{svg_count}] {path}", file=sys.stderr)

        report = convert_directory(
            input_dir, config, optimizer=optimizer, progress=show_progress
        )

    try:
        report.written = write_artifacts(report.artifacts, args.output, config)
    except OSError as e:
        print(f"Error: Failed to write output: {e}", file=sys.stderr)
        return 1

    print(format_conversion_report(report))

    if report.has_errors:
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
