"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.config import Config
from seamcarve.energy import (gradient_magnitude_energy, normalize_energy,
                              apply_masks, compute_energy, to_grayscale)
from seamcarve.orientation import transpose

from conftest import make_flat_image


class TestGradientMagnitudeEnergy:
    def test_uniform_image_is_zero_everywhere(self):
        """A solid-color image has zero energy, borders included."""
        image = make_flat_image(20, 20)
        energy = gradient_magnitude_energy(image)
        assert energy.abs().max() < 1e-9

    def test_vertical_edge_has_horizontal_energy(self):
        """An image with a single vertical edge should have energy along that edge."""
        image = torch.zeros(1, 20, 20)
        image[:, :, 10:] = 1.0
        energy = gradient_magnitude_energy(image)
        edge_energy = energy[2:-2, 9:11].mean()
        bg_energy = energy[2:-2, 2:6].mean()
        assert edge_energy > 0
        assert bg_energy < 1e-9

    def test_horizontal_edge_has_vertical_energy(self):
        """An image with a horizontal edge should have energy along that edge."""
        image = torch.zeros(1, 20, 20)
        image[:, 10:, :] = 1.0
        energy = gradient_magnitude_energy(image)
        assert energy[9:11, 2:-2].min() > 0
        assert energy[2:6, 2:-2].max() < 1e-9

    def test_output_shape_matches_input(self):
        """Energy map should have same spatial dimensions as input."""
        image = torch.rand(3, 32, 48)
        energy = gradient_magnitude_energy(image)
        assert energy.shape == (32, 48)
        assert energy.dtype == torch.float64

    def test_grayscale_input(self):
        """Should work with 2D grayscale input."""
        image = torch.rand(20, 20)
        energy = gradient_magnitude_energy(image)
        assert energy.shape == (20, 20)

    def test_single_pixel_image(self):
        """A 1x1 image is still a valid input."""
        torch.manual_seed(42)
        image = torch.rand(3, 1, 1)
        energy = gradient_magnitude_energy(image)
        assert energy.shape == (1, 1)
        assert energy.abs().item() < 1e-9
        assert compute_energy(image).item() == 0.0

    def test_energy_nonnegative(self):
        """Energy is a magnitude, never negative."""
        torch.manual_seed(42)
        image = torch.rand(3, 30, 30)
        energy = gradient_magnitude_energy(image)
        assert (energy >= 0).all()

    def test_transpose_symmetry(self):
        """Energy of the transposed image is the transposed energy."""
        torch.manual_seed(0)
        image = torch.rand(3, 12, 17)
        direct = gradient_magnitude_energy(image)
        swapped = gradient_magnitude_energy(transpose(image))
        assert torch.allclose(transpose(direct), swapped, atol=1e-9)


class TestGrayscale:
    def test_luma_weights(self):
        image = torch.zeros(3, 1, 1)
        image[1] = 1.0
        assert to_grayscale(image).item() == pytest.approx(0.587)


class TestNormalizeEnergy:
    def test_min_is_zero_max_is_ceiling(self):
        """After normalization, min maps to 0 and max to 255."""
        energy = torch.tensor([[1.0, 5.0], [3.0, 10.0]], dtype=torch.float64)
        normed = normalize_energy(energy)
        assert normed.min().item() == pytest.approx(0.0)
        assert normed.max().item() == pytest.approx(255.0)

    def test_custom_ceiling(self):
        energy = torch.tensor([[2.0, 4.0]], dtype=torch.float64)
        normed = normalize_energy(energy, ceiling=1.0)
        assert normed.tolist() == [[0.0, 1.0]]

    def test_scale_invariant(self):
        """Low- and high-contrast versions of a map normalize identically."""
        torch.manual_seed(42)
        energy = torch.rand(10, 10, dtype=torch.float64)
        assert torch.allclose(normalize_energy(energy), normalize_energy(energy * 40 + 3))

    def test_uniform_energy_produces_zeros(self):
        """A constant map has no range and normalizes to all zeros."""
        energy = torch.ones(10, 10, dtype=torch.float64) * 5.0
        normed = normalize_energy(energy)
        assert normed.abs().max() == 0.0


class TestApplyMasks:
    def test_protect_sets_max_sentinel(self):
        energy = torch.zeros(4, 4, dtype=torch.float64)
        protect = torch.zeros(4, 4)
        protect[1, 2] = 1.0
        biased = apply_masks(energy, protect_mask=protect)
        assert biased[1, 2] == Config.MAX_ENERGY
        assert biased.sum() == Config.MAX_ENERGY

    def test_remove_sets_min_sentinel(self):
        energy = torch.zeros(4, 4, dtype=torch.float64)
        remove = torch.zeros(4, 4)
        remove[3, 0] = 1.0
        biased = apply_masks(energy, remove_mask=remove)
        assert biased[3, 0] == Config.MIN_ENERGY

    def test_remove_wins_over_protect(self):
        """A pixel marked in both masks ends up at the minimum sentinel."""
        energy = torch.full((3, 3), 7.0, dtype=torch.float64)
        both = torch.zeros(3, 3)
        both[1, 1] = 1.0
        biased = apply_masks(energy, protect_mask=both, remove_mask=both)
        assert biased[1, 1] == Config.MIN_ENERGY

    def test_any_nonzero_value_is_active(self):
        """Mask magnitude does not matter, only zero vs non-zero."""
        energy = torch.zeros(1, 3, dtype=torch.float64)
        protect = torch.tensor([[0.0, 0.01, 1.0]])
        biased = apply_masks(energy, protect_mask=protect)
        assert biased.tolist() == [[0.0, Config.MAX_ENERGY, Config.MAX_ENERGY]]

    def test_does_not_modify_input(self):
        energy = torch.zeros(2, 2, dtype=torch.float64)
        apply_masks(energy, protect_mask=torch.ones(2, 2))
        assert energy.abs().max() == 0.0

    def test_mask_shape_mismatch_raises(self):
        energy = torch.zeros(4, 4, dtype=torch.float64)
        with pytest.raises(ValueError):
            apply_masks(energy, protect_mask=torch.ones(4, 5))


class TestComputeEnergy:
    def test_range_without_masks(self):
        torch.manual_seed(42)
        energy = compute_energy(torch.rand(3, 16, 16))
        assert energy.min().item() == pytest.approx(0.0)
        assert energy.max().item() == pytest.approx(Config.ENERGY_CEILING)

    def test_masked_pixels_take_sentinels(self):
        """Protect -> MAX, remove -> MIN, overlap -> MIN."""
        torch.manual_seed(42)
        image = torch.rand(3, 8, 8)
        protect = torch.zeros(8, 8)
        protect[:4] = 1.0
        remove = torch.zeros(8, 8)
        remove[3:5] = 1.0

        energy = compute_energy(image, protect, remove)
        assert (energy[:3] == Config.MAX_ENERGY).all()
        assert (energy[3:5] == Config.MIN_ENERGY).all()
        assert (energy[5:] <= Config.ENERGY_CEILING).all()
