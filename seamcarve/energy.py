"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the gradient magnitude of the luminance channel (Avidan & Shamir 2007),
rescaled to a fixed range, and then biased by optional protect/remove masks.
"""

from typing import Optional

import torch
import torch.nn.functional as F

from .config import Config


def to_grayscale(image: torch.Tensor) -> torch.Tensor:
    """Collapse an image to a single luminance channel (H, W)."""
    if image.dim() == 2:
        return image.to(torch.float64)
    if image.shape[0] == 3:
        r, g, b = Config.LUMA_WEIGHTS
        image = image.to(torch.float64)
        return r * image[0] + g * image[1] + b * image[2]
    return image[0].to(torch.float64)


def _sobel_kernels(dtype: torch.dtype, device: torch.device):
    smooth = torch.tensor(Config.SOBEL_SMOOTH, dtype=dtype, device=device)
    deriv = torch.tensor(Config.SOBEL_DERIVATIVE, dtype=dtype, device=device)
    kernel_x = torch.outer(smooth, deriv)
    kernel_y = torch.outer(deriv, smooth)
    return kernel_x.view(1, 1, 5, 5), kernel_y.view(1, 1, 5, 5)


def gradient_magnitude_energy(image: torch.Tensor) -> torch.Tensor:
    """
    Compute gradient magnitude energy for an image.

    Uses the L2 norm of 5-tap Sobel gradients on the luminance channel:
    E(i,j) = sqrt(gx(i,j)^2 + gy(i,j)^2)

    Borders are replicated, so a flat image has zero energy everywhere,
    including at the edges.

    Args:
        image: RGB image tensor (C, H, W) or grayscale (H, W)

    Returns:
        Energy map (H, W), float64
    """
    gray = to_grayscale(image)
    H, W = gray.shape

    kernel_x, kernel_y = _sobel_kernels(gray.dtype, gray.device)

    # replicate padding works for any size, including 1x1
    padded = F.pad(gray.view(1, 1, H, W), (2, 2, 2, 2), mode='replicate')

    grad_x = F.conv2d(padded, kernel_x)
    grad_y = F.conv2d(padded, kernel_y)

    energy = torch.sqrt(grad_x ** 2 + grad_y ** 2)
    return energy.view(H, W)


def normalize_energy(energy: torch.Tensor,
                     ceiling: float = Config.ENERGY_CEILING) -> torch.Tensor:
    """Rescale energy linearly so its minimum maps to 0 and maximum to ``ceiling``.

    This is a monotonic transform so seam positions are unchanged, but it
    keeps energy on the same scale regardless of image contrast. A constant
    map becomes all zeros.

    Args:
        energy: Energy map (H, W)
        ceiling: Value assigned to the maximum

    Returns:
        Normalized energy map in [0, ceiling]
    """
    e_min = energy.min()
    e_range = energy.max() - e_min
    if e_range <= 0:
        return torch.zeros_like(energy)
    return (energy - e_min) * (ceiling / e_range)


def _check_mask(mask: torch.Tensor, energy: torch.Tensor, name: str):
    if mask.shape != energy.shape:
        raise ValueError(
            f"{name} mask shape {tuple(mask.shape)} does not match "
            f"energy shape {tuple(energy.shape)}"
        )


def apply_masks(energy: torch.Tensor,
                protect_mask: Optional[torch.Tensor] = None,
                remove_mask: Optional[torch.Tensor] = None) -> torch.Tensor:
    """
    Bias an energy map with protect and remove masks.

    Active protect pixels are forced to Config.MAX_ENERGY so no seam routes
    through them; active remove pixels are forced to Config.MIN_ENERGY so
    seams are drawn through them. Any non-zero mask value is active.

    The remove mask is applied after the protect mask, so a pixel marked in
    both ends up at MIN_ENERGY.

    Args:
        energy: Energy map (H, W)
        protect_mask: Optional mask (H, W)
        remove_mask: Optional mask (H, W)

    Returns:
        New biased energy map (H, W)
    """
    biased = energy.clone()

    if protect_mask is not None:
        _check_mask(protect_mask, energy, 'protect')
        biased[protect_mask > Config.MASK_THRESHOLD] = Config.MAX_ENERGY

    if remove_mask is not None:
        _check_mask(remove_mask, energy, 'remove')
        biased[remove_mask > Config.MASK_THRESHOLD] = Config.MIN_ENERGY

    return biased


def compute_energy(image: torch.Tensor,
                   protect_mask: Optional[torch.Tensor] = None,
                   remove_mask: Optional[torch.Tensor] = None) -> torch.Tensor:
    """
    Full energy model: gradient magnitude, rescaled to [0, 255], then masked.

    Pure function of its inputs; call it again after every seam edit.

    Args:
        image: RGB image tensor (C, H, W) or grayscale (H, W)
        protect_mask: Optional mask (H, W) of pixels to keep
        remove_mask: Optional mask (H, W) of pixels to remove first

    Returns:
        Energy map (H, W), float64
    """
    energy = normalize_energy(gradient_magnitude_energy(image))
    return apply_masks(energy, protect_mask, remove_mask)
