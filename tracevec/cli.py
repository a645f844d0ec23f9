"""Command line interface for tracevec."""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from tracevec.pipeline import TracePipeline
from tracevec.types import SvgOptions, TraceConfig, VectorizationError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='tracevec',
        description='Trace raster images into flat-color SVG paths',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tracevec logo.png
  tracevec logo.png -o logo.svg --simplification 0.5
  tracevec scan.png --denoise 2 --stroke --stroke-color "#333333"
        """,
    )

    parser.add_argument('input', type=str, help='Input image path')

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output SVG path (default: input.svg)'
    )

    parser.add_argument(
        '-s', '--simplification',
        type=float,
        default=2.0,
        help='Path simplification tolerance in pixels (default: 2.0)'
    )

    parser.add_argument(
        '--denoise',
        type=int,
        default=0,
        help='Box-blur radius applied to each color mask before tracing (default: 0, off)'
    )

    parser.add_argument(
        '--stroke',
        action='store_true',
        help='Outline every shape'
    )

    parser.add_argument(
        '--stroke-color',
        type=str,
        default='#000000',
        help='Outline color (default: #000000)'
    )

    parser.add_argument(
        '--stroke-width',
        type=float,
        default=1.0,
        help='Outline width (default: 1.0)'
    )

    parser.add_argument(
        '--precision',
        type=int,
        default=2,
        help='Decimal places for coordinates (default: 2)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        help='Processes for per-color tracing, -1 for all cores (default: 1)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    input_path = Path(parsed.input)
    if parsed.output:
        output_path = Path(parsed.output)
    else:
        output_path = input_path.with_suffix('.svg')

    try:
        config = TraceConfig(denoise_radius=parsed.denoise, workers=parsed.workers)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    options = SvgOptions(
        simplification=parsed.simplification,
        stroke_enabled=parsed.stroke,
        stroke_color=parsed.stroke_color,
        stroke_width=parsed.stroke_width,
        precision=parsed.precision,
    )

    print(f"Processing: {input_path}")
    print(f"  Simplification: {options.simplification}")
    print(f"  Denoise radius: {config.denoise_radius}")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        pipeline = TracePipeline(config)
        pipeline.process(input_path, output_path, options)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except VectorizationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    traced = pipeline.traced
    print(f"  Image: {traced.width}x{traced.height}")
    print(f"  Shapes: {len(traced.shapes)}")
    print(f"  Output saved: {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
