"""Core types for the tracing pipeline."""
from dataclasses import dataclass, field
from typing import List, Tuple
import numpy as np


# Binary (H, W) uint8 buffer holding only 0 and 255
Mask = np.ndarray


@dataclass
class Point:
    """2D point with float coordinates (pixel space)."""
    x: float
    y: float


Path = List[Point]


@dataclass
class Color:
    """RGBA color with integer channels in [0, 255]."""
    r: int
    g: int
    b: int
    a: int = 255

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


@dataclass
class QuantizedColor(Color):
    """
    Representative color of a quantization bucket.

    r, g, b hold the quantized channels. a holds the alpha of the first
    pixel discovered in the bucket, before the opaque collapse.
    """
    count: int = 0


@dataclass
class TracedShape:
    """All contours traced for one quantized color."""
    color: Color
    contours: List[Path] = field(default_factory=list)
    area: int = 0


@dataclass
class TracedData:
    """Result of a trace: raw (unsimplified) shapes, largest first."""
    width: int
    height: int
    shapes: List[TracedShape] = field(default_factory=list)


@dataclass
class PixelBuffer:
    """Row-major RGBA pixels as an (H, W, 4) uint8 array."""
    pixels: np.ndarray

    def __post_init__(self):
        if not isinstance(self.pixels, np.ndarray):
            raise ValueError("Pixel data must be a numpy array")
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) array, got shape {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {self.pixels.dtype}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "PixelBuffer":
        """
        Build a buffer from raw RGBA bytes.

        Raises:
            ValueError: If len(data) != width * height * 4
        """
        if width < 0 or height < 0:
            raise ValueError(f"Invalid dimensions {width}x{height}")
        expected = width * height * 4
        if len(data) != expected:
            raise ValueError(
                f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}"
            )
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4)
        return cls(pixels=pixels.copy())


@dataclass
class TraceConfig:
    """Configuration for the raster tracing stage."""
    # Color quantization
    quant_step: int = 16
    alpha_threshold: int = 10  # Pixels with alpha <= this are ignored
    opaque_alpha: int = 192  # Quantized alpha at or above this is one bucket
    min_pixel_count: int = 4

    # Pre-trace smoothing, 0 disables
    denoise_radius: int = 0

    # Performance
    workers: int = 1  # -1 = auto

    def __post_init__(self):
        if self.quant_step < 1:
            raise ValueError(f"quant_step must be >= 1, got {self.quant_step}")
        for name in ("alpha_threshold", "opaque_alpha"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255], got {value}")
        if self.min_pixel_count < 1:
            raise ValueError(f"min_pixel_count must be >= 1, got {self.min_pixel_count}")


@dataclass
class SvgOptions:
    """Styling options for SVG generation. Never trigger a re-trace."""
    simplification: float = 2.0
    stroke_enabled: bool = False
    stroke_color: str = "#000000"
    stroke_width: float = 1.0
    precision: int = 2  # Decimal places for SVG coordinates


class VectorizationError(Exception):
    """Base exception for vectorization errors."""
    pass


class InputEmptyError(VectorizationError):
    """No color survived the visibility and pixel-count filters."""
    pass


class NoTraceableGeometryError(VectorizationError):
    """Every color produced only empty or degenerate contours."""
    pass


class ResourceUnavailableError(VectorizationError):
    """Pixel data could not be acquired from its source."""
    pass
