"""Tests for LUT generator."""

import numpy as np
import pytest

from frame_lut.lut import Lut1D, Lut3D
from frame_lut.lut.generator import LUMA_WEIGHTS, LUTGenerator


class TestLUTGenerator:
    """Test cases for LUTGenerator class."""

    def test_init_default_size(self) -> None:
        """Test default initialization."""
        generator = LUTGenerator()
        assert generator.size == 33

    def test_init_invalid_size(self) -> None:
        """Test initialization with invalid size."""
        with pytest.raises(ValueError, match="LUT size must be at least 2"):
            LUTGenerator(1)

    def test_identity_3d_shape(self) -> None:
        """Test identity 3D LUT has correct shape."""
        grid = LUTGenerator(33).identity_3d()
        assert isinstance(grid, Lut3D)
        assert grid.table.shape == (33, 33, 33, 3)

    def test_identity_3d_values(self) -> None:
        """Test identity 3D LUT values are in channel units."""
        table = LUTGenerator(3).identity_3d().table

        assert np.allclose(table[0, 0, 0], [0.0, 0.0, 0.0])
        assert np.allclose(table[2, 2, 2], [255.0, 255.0, 255.0])
        assert np.allclose(table[1, 1, 1], [127.5, 127.5, 127.5])
        assert np.allclose(table[2, 0, 1], [255.0, 0.0, 127.5])

    def test_identity_1d_values(self) -> None:
        """Test identity 1D LUT ramps every channel."""
        grid = LUTGenerator(5).identity_1d()

        assert isinstance(grid, Lut1D)
        assert np.allclose(grid.table[:, 0], [0.0, 63.75, 127.5, 191.25, 255.0])

    def test_apply_gamma(self) -> None:
        """Test gamma correction with normal values."""
        grid = LUTGenerator(3).apply_gamma(2.2)

        expected = np.power(0.5, 1.0 / 2.2) * 255
        assert np.allclose(grid.table[1, 1, 1], [expected, expected, expected])

    def test_apply_gamma_1d(self) -> None:
        """Test gamma correction as a 1D LUT."""
        grid = LUTGenerator(3).apply_gamma(2.2, kind="1d")

        assert isinstance(grid, Lut1D)
        assert np.allclose(grid.table[1], np.power(0.5, 1.0 / 2.2) * 255)

    def test_apply_gamma_invalid(self) -> None:
        """Test gamma correction with invalid values."""
        generator = LUTGenerator(3)
        with pytest.raises(ValueError, match="Gamma must be positive"):
            generator.apply_gamma(0)
        with pytest.raises(ValueError, match="Gamma must be positive"):
            generator.apply_gamma(-1)

    def test_apply_brightness_contrast(self) -> None:
        """Test brightness and contrast adjustment."""
        grid = LUTGenerator(3).apply_brightness_contrast(brightness=0.1, contrast=1.2)

        # Midpoint (0.5) should become (0.5 - 0.5) * 1.2 + 0.5 + 0.1 = 0.6
        assert np.allclose(grid.table[1, 1, 1], [0.6 * 255] * 3)

    def test_apply_brightness_contrast_invalid(self) -> None:
        """Test brightness and contrast with invalid values."""
        with pytest.raises(ValueError, match="Contrast must be positive"):
            LUTGenerator(3).apply_brightness_contrast(contrast=0)

    def test_apply_saturation_zero_is_grayscale(self) -> None:
        """Test zero saturation maps pure red to its luma on all channels."""
        grid = LUTGenerator(3).apply_saturation(0.0)

        assert isinstance(grid, Lut3D)
        assert np.allclose(grid.table[2, 0, 0], [LUMA_WEIGHTS[0] * 255] * 3)

    def test_apply_saturation_keeps_grays(self) -> None:
        """Test saturation changes leave neutral colors alone."""
        grid = LUTGenerator(5).apply_saturation(1.8)
        for i in range(5):
            assert np.allclose(grid.table[i, i, i], [i * 63.75] * 3)

    def test_apply_saturation_invalid(self) -> None:
        """Test saturation with invalid values."""
        with pytest.raises(ValueError, match="Saturation must be non-negative"):
            LUTGenerator(3).apply_saturation(-1)

    def test_apply_transform_custom(self) -> None:
        """Test applying custom transform function."""

        def invert_transform(rgb: np.ndarray) -> np.ndarray:
            return 1.0 - rgb

        grid = LUTGenerator(3).apply_transform(invert_transform)

        assert np.allclose(grid.table[0, 0, 0], [255.0, 255.0, 255.0])
        assert np.allclose(grid.table[2, 2, 2], [0.0, 0.0, 0.0])

    def test_apply_transform_shape_change(self) -> None:
        """Test transforms must keep the sample shape."""
        with pytest.raises(ValueError, match="Transform changed sample shape"):
            LUTGenerator(3).apply_transform(lambda rgb: rgb[:, :2])

    def test_apply_transform_invalid_kind(self) -> None:
        """Test unknown LUT kinds are rejected."""
        with pytest.raises(ValueError, match="Unsupported LUT kind: 2D"):
            LUTGenerator(3).apply_transform(lambda rgb: rgb, kind="2D")

    def test_create_custom_lut_identity(self) -> None:
        """Test creating custom LUT with identity parameters."""
        generator = LUTGenerator(3)
        grid = generator.create_custom_lut()

        assert np.allclose(grid.table, generator.identity_3d().table)

    def test_create_custom_lut(self) -> None:
        """Test creating custom LUT with all parameters."""
        grid = LUTGenerator(5).create_custom_lut(
            gamma=2.2, brightness=0.1, contrast=1.1, saturation=1.2
        )

        assert grid.table.shape == (5, 5, 5, 3)
        assert np.all(grid.table >= 0)
        assert np.all(grid.table <= 255)

    def test_create_custom_lut_1d_rejects_saturation(self) -> None:
        """Test saturation cannot be expressed per channel."""
        with pytest.raises(ValueError, match="Saturation requires a 3D LUT"):
            LUTGenerator(3).create_custom_lut(saturation=0.5, kind="1D")

    def test_lut_value_range(self) -> None:
        """Test that LUT values are always in valid range."""
        grid = LUTGenerator(5).create_custom_lut(
            gamma=0.1, brightness=0.5, contrast=2.0, saturation=2.0
        )

        assert np.all(grid.table >= 0)
        assert np.all(grid.table <= 255)
