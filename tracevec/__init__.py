"""tracevec: flat-color raster to SVG tracing.

Quantizes an image into color buckets, traces each bucket's mask into
closed polygons (holes included), simplifies them and emits SVG paths.
"""
from tracevec.types import (
    Color,
    QuantizedColor,
    Point,
    PixelBuffer,
    TracedShape,
    TracedData,
    TraceConfig,
    SvgOptions,
    VectorizationError,
    InputEmptyError,
    NoTraceableGeometryError,
    ResourceUnavailableError,
)
from tracevec.pipeline import trace_image, TracePipeline, process_image
from tracevec.svg_export import generate_svg

__version__ = "0.1.0"
__all__ = [
    "Color",
    "QuantizedColor",
    "Point",
    "PixelBuffer",
    "TracedShape",
    "TracedData",
    "TraceConfig",
    "SvgOptions",
    "VectorizationError",
    "InputEmptyError",
    "NoTraceableGeometryError",
    "ResourceUnavailableError",
    "trace_image",
    "TracePipeline",
    "process_image",
    "generate_svg",
]
