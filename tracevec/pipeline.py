"""Main pipeline orchestrator for tracevec."""
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional, Union
import logging
import os
import time

import numpy as np

from tracevec.types import (
    PixelBuffer,
    QuantizedColor,
    SvgOptions,
    TraceConfig,
    TracedData,
    TracedShape,
    InputEmptyError,
    NoTraceableGeometryError,
)
from tracevec.raster_ingest import ingest
from tracevec.quantization import quantize_colors, bucket_keys
from tracevec.masking import create_color_mask
from tracevec.denoise import denoise_mask
from tracevec.contour import trace_contours
from tracevec.svg_export import generate_svg, save_svg

logger = logging.getLogger(__name__)


def _trace_color(
    buffer: PixelBuffer,
    color: QuantizedColor,
    config: TraceConfig,
    keys: np.ndarray
) -> Optional[TracedShape]:
    """Mask, optionally denoise, and trace a single color."""
    mask = create_color_mask(buffer, color, config, keys=keys)
    if config.denoise_radius > 0:
        mask = denoise_mask(mask, config.denoise_radius)

    contours = trace_contours(mask)
    logger.debug(
        f"Color {color.to_hex()} (alpha {color.a}, {color.count} px): "
        f"{len(contours)} contours"
    )

    if not any(len(c) > 1 for c in contours):
        return None
    return TracedShape(color=color, contours=contours, area=color.count)


def _resolve_workers(config: TraceConfig, n_colors: int) -> int:
    if config.workers == -1:
        return min(os.cpu_count() or 1, n_colors)
    return max(1, min(config.workers, n_colors))


def trace_image(buffer: PixelBuffer, config: Optional[TraceConfig] = None) -> TracedData:
    """
    Trace an image into per-color shapes.

    This is the expensive, raster-resolution stage. The result keeps raw
    contours so it can be rendered at any simplification level without
    touching the pixels again.

    Args:
        buffer: Source pixels
        config: Tracing configuration (defaults if None)

    Returns:
        TracedData with shapes sorted by area, largest first

    Raises:
        InputEmptyError: If no color survives quantization
        NoTraceableGeometryError: If no color yields a usable contour
    """
    config = config or TraceConfig()
    start_time = time.time()

    colors = quantize_colors(buffer, config)
    if not colors:
        raise InputEmptyError(
            "No significant colors found in the image. "
            "Try an image with a transparent background or more contrast."
        )

    keys = bucket_keys(buffer, config)
    workers = _resolve_workers(config, len(colors))

    results: List[Optional[TracedShape]] = [None] * len(colors)
    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            future_to_index = {
                executor.submit(_trace_color, buffer, color, config, keys): i
                for i, color in enumerate(colors)
            }
            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()
    else:
        for i, color in enumerate(colors):
            results[i] = _trace_color(buffer, color, config, keys)

    shapes = [shape for shape in results if shape is not None]
    if not shapes:
        raise NoTraceableGeometryError(
            "Could not trace any vector paths from the image. "
            "Try an image with a transparent background or more contrast."
        )

    # Stable sort keeps discovery order among equal areas
    shapes.sort(key=lambda s: -s.area)

    logger.info(
        f"Traced {len(shapes)} shapes from {len(colors)} colors "
        f"({buffer.width}x{buffer.height}) in {time.time() - start_time:.2f}s"
    )

    return TracedData(width=buffer.width, height=buffer.height, shapes=shapes)


class TracePipeline:
    """Two-speed vectorization: trace once, render many times."""

    def __init__(self, config: Optional[TraceConfig] = None):
        """
        Initialize pipeline with configuration.

        Args:
            config: Tracing configuration. Uses defaults if None.
        """
        self.config = config or TraceConfig()
        self.traced: Optional[TracedData] = None

    def trace(self, buffer: PixelBuffer) -> TracedData:
        """Trace a buffer and keep the result for later renders."""
        self.traced = trace_image(buffer, self.config)
        return self.traced

    def render(self, options: Optional[SvgOptions] = None) -> str:
        """
        Render the last trace as SVG.

        Raises:
            RuntimeError: If nothing has been traced yet
        """
        if self.traced is None:
            raise RuntimeError("No traced data; call trace() first")
        return generate_svg(self.traced, options)

    def process(
        self,
        input_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
        options: Optional[SvgOptions] = None
    ) -> str:
        """
        Ingest, trace and render an image file.

        Args:
            input_path: Path to input image
            output_path: Optional path to save SVG output
            options: Styling options (defaults if None)

        Returns:
            SVG string
        """
        buffer = ingest(input_path)
        self.trace(buffer)
        svg = self.render(options)

        if output_path:
            save_svg(svg, str(output_path))
            logger.info(f"Saved SVG to {output_path}")

        return svg


def process_image(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[TraceConfig] = None,
    options: Optional[SvgOptions] = None
) -> str:
    """
    Convenience function for one-off processing.

    Example:
        >>> svg = process_image("logo.png", "logo.svg")
        >>> svg = process_image("logo.png", options=SvgOptions(simplification=0.5))
    """
    return TracePipeline(config).process(input_path, output_path, options)
