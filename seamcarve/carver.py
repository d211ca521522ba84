"""
Seam carving session: one image and its masks, from load to save.
"""

import logging
from typing import Optional

import torch

from .carving import CarveState, CarveStats, carve
from .image_io import load_image, load_mask, save_image

logger = logging.getLogger("seamcarve.carver")


class SeamCarver:
    """
    Owns an image plus optional protect/remove masks for one resize session.

    Usage:
        carver = SeamCarver.from_files('face.jpg', protect_path='face_mask.png')
        carver.resize(400, None)
        carver.save('shrunk.jpg')
    """

    def __init__(self, image: torch.Tensor,
                 protect_mask: Optional[torch.Tensor] = None,
                 remove_mask: Optional[torch.Tensor] = None):
        self.state = CarveState(image, protect_mask, remove_mask)

    @classmethod
    def from_files(cls, image_path: str, protect_path: Optional[str] = None,
                   remove_path: Optional[str] = None, device='cpu') -> 'SeamCarver':
        """
        Load an image and its optional masks.

        The image must load (LoadError otherwise). Masks that fail to load
        are skipped with a warning; masks of the wrong size are resampled.
        """
        image = load_image(image_path, device=device)
        size = tuple(image.shape[-2:])
        protect_mask = load_mask(protect_path, size, kind='protection', device=device)
        remove_mask = load_mask(remove_path, size, kind='removal', device=device)
        return cls(image, protect_mask, remove_mask)

    @property
    def image(self) -> torch.Tensor:
        return self.state.image

    @property
    def width(self) -> int:
        return self.state.width

    @property
    def height(self) -> int:
        return self.state.height

    def resize(self, width: Optional[int] = None,
               height: Optional[int] = None) -> CarveStats:
        """Resize to (width, height); None keeps that dimension."""
        self.state, stats = carve(self.state, width, height)
        return stats

    def save(self, path: str):
        save_image(self.state.image, path)

    def show(self, title: str = 'Seam Carving Result'):
        from .visualize import show_image
        show_image(self.state.image, title)
