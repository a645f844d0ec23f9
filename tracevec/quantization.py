"""Fixed-step color quantization into (r, g, b, alpha) buckets."""
from typing import List, Optional
import logging

import numpy as np

from tracevec.types import PixelBuffer, QuantizedColor, Color, TraceConfig

logger = logging.getLogger(__name__)

INVISIBLE = -1


def quantize_channel(values, step: int):
    """Floor a channel (scalar or array) to a multiple of step. Never exceeds the input."""
    return (values // step) * step


def effective_alpha(quantized_alpha, opaque_alpha: int):
    """Collapse every quantized alpha at or above opaque_alpha to 255."""
    return np.where(quantized_alpha >= opaque_alpha, 255, quantized_alpha)


def pack_key(r, g, b, a):
    return (r << 24) | (g << 16) | (b << 8) | a


def bucket_keys(buffer: PixelBuffer, config: Optional[TraceConfig] = None) -> np.ndarray:
    """
    Compute the packed bucket key of every pixel.

    Args:
        buffer: Source pixels
        config: Quantization parameters (defaults if None)

    Returns:
        (H, W) int64 array of keys; INVISIBLE where alpha is at or below
        the visibility threshold
    """
    config = config or TraceConfig()
    step = config.quant_step
    pixels = buffer.pixels.astype(np.int64)

    r = quantize_channel(pixels[..., 0], step)
    g = quantize_channel(pixels[..., 1], step)
    b = quantize_channel(pixels[..., 2], step)
    alpha = pixels[..., 3]
    a = effective_alpha(quantize_channel(alpha, step * 2), config.opaque_alpha)

    keys = pack_key(r, g, b, a)
    keys[alpha <= config.alpha_threshold] = INVISIBLE
    return keys


def color_key(color: Color, config: Optional[TraceConfig] = None) -> int:
    """Packed bucket key a pixel of this color would fall into."""
    config = config or TraceConfig()
    step = config.quant_step
    a = int(effective_alpha(quantize_channel(color.a, step * 2), config.opaque_alpha))
    return pack_key(
        quantize_channel(color.r, step),
        quantize_channel(color.g, step),
        quantize_channel(color.b, step),
        a,
    )


def quantize_colors(
    buffer: PixelBuffer,
    config: Optional[TraceConfig] = None
) -> List[QuantizedColor]:
    """
    Reduce an image to its quantized color buckets.

    Each visible pixel's channels are floored to a multiple of the
    quantization step (alpha to twice the step). Near-opaque alphas share
    one bucket so anti-aliased edges of a shape do not fragment, but the
    stored color keeps the alpha of the first pixel seen. Buckets smaller
    than the minimum pixel count are dropped as noise.

    Args:
        buffer: Source pixels
        config: Quantization parameters (defaults if None)

    Returns:
        Buckets in order of first appearance (row-major scan)
    """
    config = config or TraceConfig()
    keys = bucket_keys(buffer, config).ravel()
    alpha = buffer.pixels[..., 3].ravel()

    visible = np.flatnonzero(keys != INVISIBLE)
    if visible.size == 0:
        logger.info("No visible pixels to quantize")
        return []

    unique_keys, first_seen, counts = np.unique(
        keys[visible], return_index=True, return_counts=True
    )

    colors = []
    for i in np.argsort(first_seen, kind="stable"):
        count = int(counts[i])
        if count < config.min_pixel_count:
            continue
        key = int(unique_keys[i])
        colors.append(QuantizedColor(
            r=(key >> 24) & 0xFF,
            g=(key >> 16) & 0xFF,
            b=(key >> 8) & 0xFF,
            a=int(alpha[visible[first_seen[i]]]),
            count=count,
        ))

    logger.info(
        f"Quantized {visible.size} visible pixels into {len(unique_keys)} buckets, "
        f"kept {len(colors)}"
    )
    return colors
