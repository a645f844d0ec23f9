"""Per-color mask extraction."""
from typing import Optional

import numpy as np

from tracevec.types import PixelBuffer, Color, Mask, TraceConfig
from tracevec.quantization import bucket_keys, color_key


def create_color_mask(
    buffer: PixelBuffer,
    color: Color,
    config: Optional[TraceConfig] = None,
    keys: Optional[np.ndarray] = None
) -> Mask:
    """
    Create a binary mask for pixels falling into the color's bucket.

    Pixels are re-quantized exactly as during quantization. For an opaque
    target any opaque pixel with the same quantized RGB matches; otherwise
    the quantized alpha must match too. Both cases reduce to equality of
    the packed bucket key, since every opaque alpha shares key alpha 255.

    Args:
        buffer: Source pixels
        color: Target bucket color
        config: Quantization parameters (defaults if None)
        keys: Precomputed bucket_keys(buffer, config), to skip re-quantizing

    Returns:
        (H, W) uint8 mask with 255 for matching pixels, 0 elsewhere
    """
    config = config or TraceConfig()
    if keys is None:
        keys = bucket_keys(buffer, config)

    return np.where(keys == color_key(color, config), 255, 0).astype(np.uint8)
