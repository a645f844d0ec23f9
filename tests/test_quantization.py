"""Tests for fixed-step color quantization."""
import numpy as np
import pytest

from tracevec.quantization import (
    bucket_keys,
    color_key,
    quantize_channel,
    quantize_colors,
    INVISIBLE,
)
from tracevec.types import Color, PixelBuffer, TraceConfig


class TestQuantizeChannel:
    """Test channel flooring."""

    def test_floors_to_step(self):
        """Values are floored, never rounded up past 255."""
        assert quantize_channel(255, 16) == 240
        assert quantize_channel(15, 16) == 0
        assert quantize_channel(16, 16) == 16
        assert quantize_channel(255, 32) == 224

    def test_array_input(self):
        values = np.array([0, 31, 32, 255])
        np.testing.assert_array_equal(quantize_channel(values, 32), [0, 0, 32, 224])


class TestQuantizeColors:
    """Test cases for quantize_colors function."""

    def test_single_solid_color(self, solid_buffer):
        """A solid image yields one bucket holding every pixel."""
        colors = quantize_colors(solid_buffer)

        assert len(colors) == 1
        color = colors[0]
        assert (color.r, color.g, color.b) == (240, 0, 0)
        assert color.a == 255
        assert color.count == 48

    def test_transparent_image(self, transparent_buffer):
        """No visible pixels means no buckets."""
        assert quantize_colors(transparent_buffer) == []

    def test_alpha_visibility_threshold(self, canvas):
        """Pixels at or below the alpha threshold are ignored."""
        pixels = canvas(4, 4)
        pixels[:2, :] = (100, 100, 100, 10)
        pixels[2:, :] = (100, 100, 100, 11)

        colors = quantize_colors(PixelBuffer(pixels=pixels))

        assert len(colors) == 1
        assert colors[0].count == 8

    def test_opaque_alphas_share_bucket(self, canvas):
        """Anti-aliased near-opaque pixels merge into one bucket."""
        pixels = canvas(4, 4)
        pixels[:, :] = (50, 60, 70, 255)
        pixels[3, :] = (50, 60, 70, 200)

        colors = quantize_colors(PixelBuffer(pixels=pixels))

        assert len(colors) == 1
        assert colors[0].count == 16

    def test_representative_keeps_first_alpha(self, canvas):
        """The stored alpha is that of the first pixel seen, before collapse."""
        pixels = canvas(4, 4)
        pixels[:, :] = (50, 60, 70, 255)
        pixels[0, 0] = (50, 60, 70, 200)

        colors = quantize_colors(PixelBuffer(pixels=pixels))

        assert colors[0].a == 200

    def test_translucent_levels_stay_separate(self, canvas):
        """Distinct translucency levels are distinct buckets."""
        pixels = canvas(4, 4)
        pixels[:2, :] = (50, 60, 70, 100)
        pixels[2:, :] = (50, 60, 70, 40)

        colors = quantize_colors(PixelBuffer(pixels=pixels))

        assert len(colors) == 2
        assert sorted(c.count for c in colors) == [8, 8]

    def test_small_buckets_discarded(self, canvas):
        """Buckets under the minimum pixel count are dropped as noise."""
        pixels = canvas(5, 5)
        pixels[:, :] = (0, 0, 255, 255)
        pixels[0, :3] = (255, 0, 0, 255)

        colors = quantize_colors(PixelBuffer(pixels=pixels))

        assert len(colors) == 1
        assert colors[0].b == 240
        assert colors[0].count == 22

    def test_min_pixel_count_configurable(self, canvas):
        pixels = canvas(5, 5)
        pixels[:, :] = (0, 0, 255, 255)
        pixels[0, :3] = (255, 0, 0, 255)

        colors = quantize_colors(PixelBuffer(pixels=pixels), TraceConfig(min_pixel_count=1))

        assert len(colors) == 2

    def test_discovery_order(self, canvas):
        """Buckets come out in row-major order of first appearance."""
        pixels = canvas(6, 6)
        pixels[:, :] = (0, 255, 0, 255)
        pixels[0, 0] = (255, 0, 0, 255)
        pixels[3:, 3:] = (255, 0, 0, 255)

        colors = quantize_colors(PixelBuffer(pixels=pixels))

        assert [c.to_hex() for c in colors] == ["#f00000", "#00f000"]

    def test_nearby_colors_merge(self, canvas):
        """Colors within one quantization step share a bucket."""
        pixels = canvas(4, 4)
        pixels[:2, :] = (200, 100, 50, 255)
        pixels[2:, :] = (207, 111, 63, 255)

        colors = quantize_colors(PixelBuffer(pixels=pixels))

        assert len(colors) == 1

    def test_keys_unique(self):
        """No two buckets share a key."""
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(30, 30, 4), dtype=np.uint8)
        buffer = PixelBuffer(pixels=pixels)

        colors = quantize_colors(buffer, TraceConfig(min_pixel_count=1))
        keys = [color_key(c) for c in colors]

        assert len(keys) == len(set(keys))
        assert sum(c.count for c in colors) == int(np.sum(pixels[..., 3] > 10))

    def test_deterministic(self):
        rng = np.random.default_rng(3)
        pixels = rng.integers(0, 256, size=(20, 20, 4), dtype=np.uint8)
        buffer = PixelBuffer(pixels=pixels)

        assert quantize_colors(buffer) == quantize_colors(buffer)


class TestBucketKeys:
    """Test cases for per-pixel bucket keys."""

    def test_invisible_marked(self, canvas):
        pixels = canvas(2, 2)
        pixels[0, 0] = (10, 20, 30, 255)

        keys = bucket_keys(PixelBuffer(pixels=pixels))

        assert keys[0, 0] != INVISIBLE
        assert (keys.ravel()[1:] == INVISIBLE).all()

    def test_color_key_matches_pixel_key(self, canvas):
        pixels = canvas(1, 1)
        pixels[0, 0] = (123, 45, 67, 150)

        keys = bucket_keys(PixelBuffer(pixels=pixels))

        assert keys[0, 0] == color_key(Color(123, 45, 67, 150))


class TestTraceConfig:
    """Test configuration validation."""

    def test_invalid_step(self):
        with pytest.raises(ValueError, match="quant_step"):
            TraceConfig(quant_step=0)

    def test_invalid_threshold(self):
        with pytest.raises(ValueError, match="alpha_threshold"):
            TraceConfig(alpha_threshold=300)

    def test_invalid_min_count(self):
        with pytest.raises(ValueError, match="min_pixel_count"):
            TraceConfig(min_pixel_count=0)
