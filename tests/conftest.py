"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')

import numpy as np
import torch
import pytest
from PIL import Image


@pytest.fixture
def random_image():
    """Seeded 3x20x30 RGB image."""
    torch.manual_seed(42)
    return torch.rand(3, 20, 30)


@pytest.fixture
def image_file(tmp_path):
    """A 24x16 RGB PNG on disk with a bright block in the middle."""
    array = np.zeros((16, 24, 3), dtype=np.uint8)
    array[4:12, 8:16] = 255
    path = tmp_path / 'input.png'
    Image.fromarray(array).save(path)
    return str(path)


def make_flat_image(H, W, value=0.5, channels=3):
    """Uniform color image: zero gradient everywhere."""
    return torch.full((channels, H, W), value)


def make_square_image(H, W, top, left, size):
    """Black image with a white size x size square, plus a mask of the square."""
    image = torch.zeros(3, H, W)
    image[:, top:top + size, left:left + size] = 1.0
    mask = torch.zeros(H, W)
    mask[top:top + size, left:left + size] = 1.0
    return image, mask


def write_mask(path, H, W, top=0, left=0, size=0):
    """Write a grayscale mask PNG with a white square."""
    array = np.zeros((H, W), dtype=np.uint8)
    array[top:top + size, left:left + size] = 255
    Image.fromarray(array).save(path)
    return str(path)
