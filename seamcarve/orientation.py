"""
Row/column duality for horizontal seams.

A horizontal seam in an image is a vertical seam in its transpose, so the
seam code only implements the vertical case and goes through these helpers
for the other one.
"""

from typing import Optional

import torch


def transpose(buffer: Optional[torch.Tensor]) -> Optional[torch.Tensor]:
    """
    Swap the two spatial axes of an image (C, H, W) or mask (H, W).

    Returns a contiguous copy so callers never alias the input, and
    transpose(transpose(x)) equals x. None passes through unchanged.
    """
    if buffer is None:
        return None
    return buffer.transpose(-2, -1).clone(memory_format=torch.contiguous_format)


def transpose_state(state):
    """Transpose the image and both masks of a CarveState together."""
    return state._replace(
        image=transpose(state.image),
        protect_mask=transpose(state.protect_mask),
        remove_mask=transpose(state.remove_mask),
    )


def check_direction(direction: str):
    if direction not in ('vertical', 'horizontal'):
        raise ValueError(f"Invalid direction: {direction}")
