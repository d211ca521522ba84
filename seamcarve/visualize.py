"""
Side-by-side comparison figures and on-screen display.
"""

import logging

import matplotlib.pyplot as plt
import torch
import torch.nn.functional as F

from .config import Config
from .exceptions import SaveError
from .image_io import to_numpy

logger = logging.getLogger("seamcarve.visualize")


def _resize_image(image: torch.Tensor, height: int, width: int) -> torch.Tensor:
    resized = F.interpolate(image.unsqueeze(0).float(), size=(height, width),
                            mode='bilinear', align_corners=False)
    return resized.squeeze(0).clamp(0.0, 1.0)


def comparison_figure(original: torch.Tensor, unprotected: torch.Tensor,
                      protected: torch.Tensor):
    """
    Create a figure comparing carving without and with face protection.

    The original is uniformly rescaled to the carved size so all three
    panels have the same dimensions.

    Args:
        original: Input image (C, H, W)
        unprotected: Carved without a protection mask (C, h, w)
        protected: Carved with a protection mask (C, h, w)

    Returns:
        matplotlib Figure
    """
    H, W = original.shape[-2:]
    h, w = unprotected.shape[-2:]
    original_resized = _resize_image(original, h, w)

    panels = [
        (original_resized, 'Original (Resized)', 'green'),
        (unprotected, 'Without Protection', 'red'),
        (protected, 'With Protection', 'green'),
    ]

    fig, axes = plt.subplots(1, 3, figsize=(15, 6))
    for ax, (image, label, color) in zip(axes, panels):
        ax.imshow(to_numpy(image))
        ax.set_title(label, color=color, fontweight='bold')
        ax.axis('off')

    fig.suptitle(Config.COMPARISON_TITLE, fontsize=16)

    info = (f"Original: {W}x{H}  |  Resized: {w}x{h}  |  "
            f"Reduction: {100.0 * (1.0 - w / W):.1f}% width, "
            f"{100.0 * (1.0 - h / H):.1f}% height")
    fig.text(0.5, 0.02, info, ha='center', color='dimgray')

    return fig


def save_comparison(original: torch.Tensor, unprotected: torch.Tensor,
                    protected: torch.Tensor, path: str):
    """Render the comparison figure to ``path``."""
    fig = comparison_figure(original, unprotected, protected)
    try:
        fig.savefig(path, dpi=Config.COMPARISON_DPI)
    except (OSError, ValueError) as e:
        raise SaveError(f"Could not save comparison image: {path}") from e
    finally:
        plt.close(fig)
    logger.info("Side-by-side comparison saved to: %s", path)


def show_image(image: torch.Tensor, title: str = 'Seam Carving Result'):
    """Display an image in a window and block until it is closed."""
    fig, ax = plt.subplots()
    ax.imshow(to_numpy(image), cmap='gray' if image.dim() == 2 else None)
    ax.set_title(title)
    ax.axis('off')
    logger.info("Close the image window to continue...")
    plt.show()
    plt.close(fig)
