"""Raster image ingestion into RGBA pixel buffers."""
from pathlib import Path
from typing import Union
import logging

import numpy as np
from PIL import Image
from PIL import ImageOps
from PIL import UnidentifiedImageError

from tracevec.types import PixelBuffer, ResourceUnavailableError

logger = logging.getLogger(__name__)


def ingest(path: Union[str, Path]) -> PixelBuffer:
    """
    Ingest a raster image file.

    The image is converted to RGBA without compositing, so transparent
    backgrounds survive into quantization.

    Args:
        path: Path to image file

    Returns:
        PixelBuffer with the image pixels

    Raises:
        FileNotFoundError: If file doesn't exist
        ResourceUnavailableError: If file cannot be loaded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise ResourceUnavailableError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            # Apply EXIF orientation transformation to handle rotation
            img = ImageOps.exif_transpose(img)
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            pixels = np.array(img, dtype=np.uint8)
    except (UnidentifiedImageError, IOError, OSError) as e:
        raise ResourceUnavailableError(f"Failed to load image {path}: {e}") from e

    logger.debug(f"Ingested {path}: {pixels.shape[1]}x{pixels.shape[0]}")
    return PixelBuffer(pixels=pixels)


def ingest_from_array(image: np.ndarray) -> PixelBuffer:
    """
    Create a PixelBuffer from a numpy array.

    Args:
        image: uint8 array of shape (H, W), (H, W, 3) or (H, W, 4)

    Returns:
        PixelBuffer, fully opaque unless the array carries alpha
    """
    if image.dtype != np.uint8:
        raise ValueError(f"Expected uint8 array, got {image.dtype}")

    if image.ndim == 2:
        # Grayscale - convert to RGB
        image = np.stack([image] * 3, axis=-1)

    if image.ndim != 3:
        raise ValueError(f"Expected 2D or 3D array, got {image.ndim}D")

    if image.shape[2] == 3:
        alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
        image = np.concatenate([image, alpha], axis=2)
    elif image.shape[2] != 4:
        raise ValueError(f"Expected 3 or 4 channels, got {image.shape[2]}")

    return PixelBuffer(pixels=np.ascontiguousarray(image))
