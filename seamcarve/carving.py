"""
High-level carving functions that drive the remove/insert cycle.

Every step takes a CarveState and returns a new one, so a resize is a fold
over seam edits: width first, then height.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import torch

from .energy import compute_energy
from .exceptions import InvalidTargetSize
from .orientation import check_direction
from .seam import dp_seam, discover_seams, insert_seams, remove_seam

logger = logging.getLogger("seamcarve.carving")


class CarveState(NamedTuple):
    """An image and the masks that travel with it through every edit."""

    image: torch.Tensor
    protect_mask: Optional[torch.Tensor] = None
    remove_mask: Optional[torch.Tensor] = None

    @property
    def height(self) -> int:
        return self.image.shape[-2]

    @property
    def width(self) -> int:
        return self.image.shape[-1]


@dataclass
class CarveStats:
    """How many single-seam operations a resize performed, per axis."""

    vertical_removed: int = 0
    vertical_inserted: int = 0
    horizontal_removed: int = 0
    horizontal_inserted: int = 0

    @property
    def total(self) -> int:
        return (self.vertical_removed + self.vertical_inserted
                + self.horizontal_removed + self.horizontal_inserted)


def _size(state: CarveState, direction: str) -> int:
    return state.width if direction == 'vertical' else state.height


def carve_step(state: CarveState, direction: str = 'vertical') -> CarveState:
    """
    Remove one seam from the image and its masks.

    Energy is recomputed from the current image, so each call sees the
    result of all previous removals.

    Args:
        state: Current image and masks
        direction: 'vertical' (width - 1) or 'horizontal' (height - 1)

    Returns:
        New CarveState, every buffer shrunk by the same seam
    """
    check_direction(direction)
    energy = compute_energy(state.image, state.protect_mask, state.remove_mask)
    seam = dp_seam(energy, direction=direction)

    def carve(buffer):
        if buffer is None:
            return None
        return remove_seam(buffer, seam, direction=direction)

    return CarveState(carve(state.image), carve(state.protect_mask),
                      carve(state.remove_mask))


def shrink(state: CarveState, n_seams: int,
           direction: str = 'vertical') -> CarveState:
    """Remove n_seams seams one at a time."""
    for i in range(n_seams):
        state = carve_step(state, direction=direction)
        if (i + 1) % 20 == 0:
            logger.debug("Removed %d/%d %s seams, size: %dx%d",
                         i + 1, n_seams, direction, state.width, state.height)
    return state


def expand(state: CarveState, n_seams: int,
           direction: str = 'vertical') -> CarveState:
    """
    Grow the image by n_seams using discover-then-batch insertion.

    All seams are discovered against the same unmodified image and inserted
    together, which spreads the new content instead of stretching one
    low-energy spot. A batch can hold at most one seam per existing column,
    so requests larger than the current size are split into rounds.

    Masks are not interpolated: inserted pixels are inactive in both masks,
    original pixels keep their mask values.

    Args:
        state: Current image and masks
        n_seams: Number of seams to insert
        direction: 'vertical' (width) or 'horizontal' (height)

    Returns:
        New CarveState grown by n_seams along the given axis
    """
    check_direction(direction)
    remaining = n_seams

    while remaining > 0:
        batch = min(remaining, _size(state, direction))
        seams = discover_seams(state.image, batch, state.protect_mask,
                               state.remove_mask, direction=direction)

        def grow(buffer, fill=None):
            if buffer is None:
                return None
            return insert_seams(buffer, seams, direction=direction, fill=fill)

        state = CarveState(grow(state.image), grow(state.protect_mask, fill=0),
                           grow(state.remove_mask, fill=0))
        remaining -= batch
        if remaining:
            logger.debug("Inserted %d %s seams, %d to go", batch, direction, remaining)

    return state


def validate_target(target_width: Optional[int], target_height: Optional[int]):
    """Reject target sizes that cannot be reached."""
    for name, value in (('width', target_width), ('height', target_height)):
        if value is not None and value < 1:
            raise InvalidTargetSize(f"Target {name} must be at least 1, got {value}")


def carve(state: CarveState, target_width: Optional[int] = None,
          target_height: Optional[int] = None) -> Tuple[CarveState, CarveStats]:
    """
    Resize an image to the target size with seam carving.

    Width is handled first, then height. Shrinking an axis by d performs d
    single-seam removals; growing it runs one batched insertion. None keeps
    the current size of that axis.

    Args:
        state: Image and optional masks
        target_width: Target width in pixels, or None
        target_height: Target height in pixels, or None

    Returns:
        (final state, operation counts)

    Raises:
        InvalidTargetSize: if a target is below 1, before any work is done
    """
    validate_target(target_width, target_height)
    stats = CarveStats()

    targets = (('vertical', target_width), ('horizontal', target_height))
    for direction, target in targets:
        if target is None:
            continue
        delta = target - _size(state, direction)
        axis = 'width' if direction == 'vertical' else 'height'

        if delta < 0:
            logger.info("Reducing %s by %d pixels...", axis, -delta)
            state = shrink(state, -delta, direction=direction)
        elif delta > 0:
            logger.info("Expanding %s by %d pixels...", axis, delta)
            state = expand(state, delta, direction=direction)
        else:
            continue

        if direction == 'vertical':
            if delta < 0:
                stats.vertical_removed += -delta
            else:
                stats.vertical_inserted += delta
        else:
            if delta < 0:
                stats.horizontal_removed += -delta
            else:
                stats.horizontal_inserted += delta

    logger.info("Resize complete. New dimensions: %dx%d", state.width, state.height)
    return state, stats


def resize_image(image: torch.Tensor, target_width: Optional[int] = None,
                 target_height: Optional[int] = None,
                 protect_mask: Optional[torch.Tensor] = None,
                 remove_mask: Optional[torch.Tensor] = None) -> torch.Tensor:
    """
    Content-aware resize of a single image.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        target_width: Target width, or None to keep it
        target_height: Target height, or None to keep it
        protect_mask: Optional mask (H, W) of pixels no seam may cross
        remove_mask: Optional mask (H, W) of pixels to remove first

    Returns:
        Resized image
    """
    state, _ = carve(CarveState(image, protect_mask, remove_mask),
                     target_width, target_height)
    return state.image
