"""
Face detection and protection-mask generation.

Detection itself is delegated to an OpenCV Haar cascade; this module turns
the detected rectangles into a mask the carver can protect.
"""

import logging
import os
from typing import Iterable, List, NamedTuple, Optional

import cv2
import numpy as np
import torch

from .config import Config
from .energy import to_grayscale
from .exceptions import DetectionError

logger = logging.getLogger("seamcarve.faces")


class Region(NamedTuple):
    """Axis-aligned rectangle in pixel coordinates."""

    x: int
    y: int
    width: int
    height: int


def expand_region(region: Region, image_width: int, image_height: int,
                  fraction: float = Config.FACE_EXPAND) -> Region:
    """Grow a region by ``fraction`` of its size on every side, clipped to the image."""
    expand_x = int(region.width * fraction)
    expand_y = int(region.height * fraction)

    x = max(0, region.x - expand_x)
    y = max(0, region.y - expand_y)
    width = min(image_width - x, region.width + 2 * expand_x)
    height = min(image_height - y, region.height + 2 * expand_y)
    return Region(x, y, width, height)


def regions_to_mask(regions: Iterable[Region], height: int, width: int,
                    fraction: float = Config.FACE_EXPAND) -> torch.Tensor:
    """
    Rasterise regions into a protection mask.

    Args:
        regions: Detected rectangles
        height: Mask height
        width: Mask width
        fraction: Margin added on each side of every region

    Returns:
        Mask (height, width) with 1.0 inside the expanded regions
    """
    mask = torch.zeros(height, width)
    for region in regions:
        x, y, w, h = expand_region(region, width, height, fraction)
        mask[y:y + h, x:x + w] = 1.0
    return mask


class HaarFaceDetector:
    """Frontal face detector backed by OpenCV's bundled Haar cascade."""

    def __init__(self, cascade_path: Optional[str] = None):
        if not hasattr(cv2, 'CascadeClassifier'):
            raise DetectionError(
                f"OpenCV {cv2.__version__} does not provide CascadeClassifier")
        if cascade_path is None:
            cascade_dir = getattr(getattr(cv2, 'data', None), 'haarcascades', '')
            cascade_path = os.path.join(cascade_dir, Config.CASCADE_FILENAME)
        self._classifier = cv2.CascadeClassifier()
        if not self._classifier.load(cascade_path):
            raise DetectionError(f"Could not load Haar cascade classifier: {cascade_path}")
        logger.debug("Loaded cascade from: %s", cascade_path)

    def detect(self, image: torch.Tensor) -> List[Region]:
        """Detect faces in an image tensor (C, H, W) or (H, W) in [0, 1]."""
        gray = (to_grayscale(image) * 255).round().clamp(0, 255)
        gray = gray.cpu().numpy().astype(np.uint8)
        gray = cv2.equalizeHist(gray)

        faces = self._classifier.detectMultiScale(
            gray,
            scaleFactor=Config.FACE_SCALE_FACTOR,
            minNeighbors=Config.FACE_MIN_NEIGHBORS,
            minSize=Config.FACE_MIN_SIZE,
        )
        return [Region(int(x), int(y), int(w), int(h)) for (x, y, w, h) in faces]


def create_face_mask(image: torch.Tensor, detector=None) -> torch.Tensor:
    """
    Build a protection mask covering every detected face.

    Args:
        image: Image tensor (C, H, W)
        detector: Anything with ``detect(image) -> List[Region]``;
                  defaults to HaarFaceDetector

    Returns:
        Mask (H, W); all zeros when no face is found
    """
    if detector is None:
        detector = HaarFaceDetector()

    H, W = image.shape[-2:]
    regions = detector.detect(image)
    logger.info("Detected %d face(s)", len(regions))
    if not regions:
        logger.warning("No faces detected. Creating empty mask.")

    for i, region in enumerate(regions):
        logger.info("Face %d at: %s", i + 1, list(expand_region(region, W, H)))

    return regions_to_mask(regions, H, W)
