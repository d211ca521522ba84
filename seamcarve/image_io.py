"""Image and mask loading/saving between files and torch tensors."""

import logging
from typing import Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F
from PIL import Image

from .exceptions import LoadError, MaskLoadError, SaveError

logger = logging.getLogger("seamcarve.image_io")


def to_numpy(image: torch.Tensor) -> np.ndarray:
    """Tensor (C, H, W) or (H, W) in [0, 1] to a uint8 array (H, W, C) or (H, W)."""
    if image.dim() == 3:
        image = image.permute(1, 2, 0)
    img_array = image.detach().cpu().float().numpy()
    return (img_array * 255).round().clip(0, 255).astype(np.uint8)


def from_numpy(img_array: np.ndarray) -> torch.Tensor:
    """uint8 array (H, W, C) or (H, W) to a float tensor (C, H, W) or (H, W) in [0, 1]."""
    tensor = torch.from_numpy(np.asarray(img_array, dtype=np.float32) / 255.0)
    if tensor.dim() == 3:
        tensor = tensor.permute(2, 0, 1).contiguous()
    return tensor


def load_image(path: str, device='cpu') -> torch.Tensor:
    """
    Load an RGB image as a float tensor (3, H, W) in [0, 1].

    Raises:
        LoadError: if the file is missing or cannot be decoded
    """
    try:
        with Image.open(path) as img:
            img_array = np.array(img.convert('RGB'))
    except (OSError, ValueError) as e:
        raise LoadError(f"Could not load input image: {path}") from e

    image = from_numpy(img_array).to(device)
    logger.info("Image loaded: %dx%d", image.shape[2], image.shape[1])
    return image


def read_mask(path: str, device='cpu') -> torch.Tensor:
    """
    Load a grayscale mask as a float tensor (H, W) in [0, 1].

    Raises:
        MaskLoadError: if the file is missing or cannot be decoded
    """
    try:
        with Image.open(path) as img:
            mask_array = np.array(img.convert('L'))
    except (OSError, ValueError) as e:
        raise MaskLoadError(f"Could not load mask: {path}") from e
    return from_numpy(mask_array).to(device)


def resize_mask(mask: torch.Tensor, height: int, width: int) -> torch.Tensor:
    """Bilinearly resample a mask (H, W) to (height, width)."""
    resized = F.interpolate(mask[None, None].float(), size=(height, width),
                            mode='bilinear', align_corners=False)
    return resized[0, 0]


def load_mask(path: Optional[str], size: Optional[Tuple[int, int]] = None,
              kind: str = 'mask', device='cpu') -> Optional[torch.Tensor]:
    """
    Load an optional mask, aligned to an image of the given (height, width).

    A mask that cannot be read is not fatal: a warning is logged and None is
    returned, so carving goes ahead without it. A mask of the wrong size is
    resampled to ``size`` with a warning.

    Args:
        path: Mask file, or None/empty for no mask
        size: (height, width) the mask must match
        kind: Label used in log messages, e.g. 'protection'
        device: torch device

    Returns:
        Mask tensor (H, W) or None
    """
    if not path:
        return None

    try:
        mask = read_mask(path, device=device)
    except MaskLoadError as e:
        logger.warning("Could not load %s mask: %s (%s)", kind, path, e.__cause__)
        return None

    if size is not None and tuple(mask.shape) != tuple(size):
        logger.warning("%s mask dimensions %dx%d do not match image %dx%d. Resizing mask.",
                       kind.capitalize(), mask.shape[1], mask.shape[0], size[1], size[0])
        mask = resize_mask(mask, *size)

    return mask


def save_image(image: torch.Tensor, path: str):
    """
    Save a tensor (C, H, W) or (H, W) in [0, 1] as an image file.

    Raises:
        SaveError: if the image cannot be encoded or written
    """
    try:
        Image.fromarray(to_numpy(image)).save(path)
    except (OSError, ValueError) as e:
        raise SaveError(f"Failed to save image to: {path}") from e
    logger.info("Image saved successfully to: %s", path)


def save_mask(mask: torch.Tensor, path: str):
    """Save a mask as a black/white grayscale image (active = 255)."""
    save_image((mask > 0).float(), path)
