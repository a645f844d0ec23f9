"""SVG export of traced shapes."""
from typing import List, Optional
from xml.sax.saxutils import escape
import logging

from tracevec.types import Color, Path, SvgOptions, TracedData, TracedShape
from tracevec.simplify import simplify_path

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def format_color(color: Color) -> str:
    """
    Format a color's RGB channels as a hex string.

    Args:
        color: Color with channels in [0, 255]

    Returns:
        Hex color string like "#ff8000"
    """
    r, g, b = [min(255, max(0, int(c))) for c in (color.r, color.g, color.b)]
    return f"#{r:02x}{g:02x}{b:02x}"


def format_opacity(color: Color) -> str:
    alpha = min(255, max(0, int(color.a)))
    return f"{alpha / 255:.2f}"


def format_number(x: float, precision: int) -> str:
    """Format number with a fixed number of decimal places."""
    return f"{x:.{precision}f}"


def paths_to_path_data(paths: List[Path], precision: int = 2) -> str:
    """
    Serialize contours into one SVG path data string.

    Each contour becomes a move-to followed by line-tos and an explicit
    close. Contours with fewer than 2 points are skipped.

    Args:
        paths: Contours to serialize
        precision: Decimal places for coordinates

    Returns:
        Path data, empty if no contour survived
    """
    fmt = lambda v: format_number(v, precision)

    commands = []
    for path in paths:
        if len(path) < 2:
            continue
        start = path[0]
        lines = ''.join(f"L{fmt(p.x)} {fmt(p.y)}" for p in path[1:])
        commands.append(f"M{fmt(start.x)} {fmt(start.y)}{lines}Z")

    return ' '.join(commands)


def shape_to_svg(shape: TracedShape, options: SvgOptions) -> str:
    """
    Convert one traced shape to an SVG path element.

    Args:
        shape: Shape with raw contours
        options: Styling and simplification options

    Returns:
        SVG path element string, or "" if every contour degenerated
    """
    epsilon = max(0.0, float(options.simplification))
    precision = max(0, int(options.precision))

    simplified = [simplify_path(c, epsilon) for c in shape.contours]
    path_data = paths_to_path_data(simplified, precision)

    if not path_data.strip():
        return ""

    attributes = [
        f'fill="{format_color(shape.color)}"',
        f'fill-opacity="{format_opacity(shape.color)}"',
        'fill-rule="evenodd"',
    ]
    if options.stroke_enabled:
        stroke_width = max(0.0, float(options.stroke_width))
        stroke_color = escape(str(options.stroke_color), {'"': "&quot;"})
        attributes.append(f'stroke="{stroke_color}"')
        attributes.append(f'stroke-width="{format_number(stroke_width, precision)}"')
        attributes.append('stroke-linejoin="round"')
    attributes.append(f'd="{path_data}"')

    return f"<path {' '.join(attributes)}/>"


def generate_svg(traced: TracedData, options: Optional[SvgOptions] = None) -> str:
    """
    Generate SVG markup from traced data.

    Only simplification and serialization run here, so this can be
    re-run cheaply whenever styling changes. Larger shapes come first so
    smaller details render on top. Never raises on empty input: with no
    drawable shapes the result is an empty svg element of the image size.

    Args:
        traced: Raw trace result
        options: Styling options (defaults if None)

    Returns:
        Complete SVG string
    """
    options = options or SvgOptions()
    width, height = traced.width, traced.height

    path_elements = []
    for shape in sorted(traced.shapes, key=lambda s: -s.area):
        element = shape_to_svg(shape, options)
        if element:
            path_elements.append(element)

    logger.debug(
        f"Emitted {len(path_elements)} of {len(traced.shapes)} shapes "
        f"at simplification {options.simplification}"
    )

    return (
        f'<svg xmlns="{SVG_NAMESPACE}" viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}">'
        f"{''.join(path_elements)}</svg>"
    )


def save_svg(svg_string: str, output_path: str) -> None:
    """
    Save SVG string to file.

    Args:
        svg_string: SVG content
        output_path: Output file path
    """
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(svg_string)
