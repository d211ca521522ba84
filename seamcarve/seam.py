"""
Seam computation and seam edits.

Finding: minimum-energy 8-connected seams by dynamic programming.
Editing: single-seam removal and batched seam insertion.

Only vertical seams are implemented directly; horizontal ones transpose the
inputs, run the vertical code and transpose the result back.
"""

import logging
from typing import List, Optional

import torch

from .energy import compute_energy
from .orientation import check_direction, transpose

logger = logging.getLogger("seamcarve.seam")


def dp_seam(energy: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """
    Compute the minimum total-energy seam with dynamic programming.

    cost(i, j) = energy(i, j) + min(cost(i-1, j), cost(i-1, j-1), cost(i-1, j+1))

    Out-of-range neighbours are treated as +inf. When predecessors tie, the
    straight-down one wins, then up-left, then up-right. The seam ends at the
    lowest-cost column of the last row (lowest index on ties) and is traced
    back through the parent table.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'

    Returns:
        Seam indices - for vertical: (H,) with column index per row
                      for horizontal: (W,) with row index per column
    """
    check_direction(direction)
    if direction == 'horizontal':
        return dp_seam(transpose(energy), direction='vertical')

    H, W = energy.shape
    device = energy.device

    cost = torch.empty(H, W, dtype=torch.float64, device=device)
    parent = torch.zeros(H, W, dtype=torch.long, device=device)
    cost[0] = energy[0]

    cols = torch.arange(W, device=device)
    # Candidate order sets the tie-break: middle, left, right
    offsets = torch.tensor([0, -1, 1], device=device)
    inf = torch.full((1,), float('inf'), dtype=torch.float64, device=device)

    for i in range(1, H):
        prev = cost[i - 1]
        prev_left = torch.cat([inf, prev[:-1]])
        prev_right = torch.cat([prev[1:], inf])

        candidates = torch.stack([prev, prev_left, prev_right])
        best, choice = torch.min(candidates, dim=0)

        cost[i] = energy[i] + best
        parent[i] = cols + offsets[choice]

    seam = torch.zeros(H, dtype=torch.long, device=device)
    seam[H - 1] = torch.argmin(cost[H - 1])
    for i in range(H - 1, 0, -1):
        seam[i - 1] = parent[i, seam[i]]

    return seam


def find_vertical_seam(energy: torch.Tensor) -> torch.Tensor:
    """Column index per row of the cheapest top-to-bottom seam."""
    return dp_seam(energy, direction='vertical')


def find_horizontal_seam(energy: torch.Tensor) -> torch.Tensor:
    """Row index per column of the cheapest left-to-right seam."""
    return dp_seam(energy, direction='horizontal')


def remove_seam(image: torch.Tensor, seam: torch.Tensor,
                direction: str = 'vertical') -> torch.Tensor:
    """
    Remove a seam from an image or mask.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices
        direction: 'vertical' or 'horizontal'

    Returns:
        Carved tensor with one column (vertical) or row (horizontal) removed
    """
    check_direction(direction)
    if direction == 'horizontal':
        return transpose(remove_seam(transpose(image), seam, direction='vertical'))

    if image.dim() == 2:
        image = image.unsqueeze(0)
        squeeze_output = True
    else:
        squeeze_output = False

    C, H, W = image.shape
    if seam.shape != (H,):
        raise ValueError(f"Seam of shape {tuple(seam.shape)} does not fit image height {H}")

    keep = torch.ones(H, W, dtype=torch.bool, device=image.device)
    keep[torch.arange(H, device=image.device), seam] = False
    carved = image[:, keep].view(C, H, W - 1)

    if squeeze_output:
        carved = carved.squeeze(0)

    return carved


def insert_seams(image: torch.Tensor, seams: List[torch.Tensor],
                 direction: str = 'vertical',
                 fill: Optional[float] = None) -> torch.Tensor:
    """
    Insert a batch of seams into an image in one pass.

    Each seam is given in the coordinates of ``image`` and no two seams may
    share a pixel. Right after every seam pixel a new pixel is inserted: the
    channel-wise mean of the seam pixel and its right neighbour, or a copy of
    the seam pixel in the last column. With ``fill`` set, inserted pixels take
    that constant value instead (used to pad masks).

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seams: List of seams, as returned by discover_seams
        direction: 'vertical' or 'horizontal'
        fill: Optional constant for the inserted pixels

    Returns:
        Tensor grown by len(seams) columns (vertical) or rows (horizontal)
    """
    check_direction(direction)
    if direction == 'horizontal':
        return transpose(insert_seams(transpose(image), seams,
                                      direction='vertical', fill=fill))

    if image.dim() == 2:
        image = image.unsqueeze(0)
        squeeze_output = True
    else:
        squeeze_output = False

    C, H, W = image.shape
    n_seams = len(seams)

    if n_seams == 0:
        expanded = image.clone()
    else:
        device = image.device
        seam_matrix = torch.stack(seams).to(device)  # (N, H)
        rows = torch.arange(H, device=device).expand(n_seams, H)

        marked = torch.zeros(H, W, dtype=torch.bool, device=device)
        marked[rows, seam_matrix] = True
        if int(marked.sum()) != n_seams * H:
            raise ValueError("Seams must not overlap")

        if fill is None:
            right = torch.cat([image[:, :, 1:], image[:, :, -1:]], dim=2)
            synthesized = ((image.double() + right.double()) / 2).to(image.dtype)
        else:
            synthesized = torch.full_like(image, fill)

        # Interleave every pixel with its candidate successor, then keep
        # the successors that sit on a seam
        interleaved = torch.stack([image, synthesized], dim=-1).view(C, H, 2 * W)
        keep = torch.stack([torch.ones_like(marked), marked], dim=-1).view(H, 2 * W)
        expanded = interleaved[:, keep].view(C, H, W + n_seams)

    if squeeze_output:
        expanded = expanded.squeeze(0)

    return expanded


def discover_seams(image: torch.Tensor, n_seams: int,
                   protect_mask: Optional[torch.Tensor] = None,
                   remove_mask: Optional[torch.Tensor] = None,
                   direction: str = 'vertical') -> List[torch.Tensor]:
    """
    Find the n best seams of an image for batched insertion.

    Seams are found one at a time on a scratch copy, removing each before
    searching for the next, so consecutive searches do not keep returning the
    same low-energy region. The scratch copy also tracks where every
    remaining pixel came from, so each seam is returned in the coordinates of
    the input image and no two seams share a pixel. Inputs are not modified.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        n_seams: Number of seams, at most the width (vertical) or height
        protect_mask: Optional mask (H, W)
        remove_mask: Optional mask (H, W)
        direction: 'vertical' or 'horizontal'

    Returns:
        List of n_seams seams, in discovery order
    """
    check_direction(direction)
    if direction == 'horizontal':
        return discover_seams(transpose(image), n_seams,
                              transpose(protect_mask), transpose(remove_mask),
                              direction='vertical')

    H, W = image.shape[-2:]
    if n_seams > W:
        raise ValueError(f"Cannot discover {n_seams} seams in an image {W} pixels wide")

    scratch_image = image.clone()
    scratch_protect = protect_mask.clone() if protect_mask is not None else None
    scratch_remove = remove_mask.clone() if remove_mask is not None else None
    origin = torch.arange(W, device=image.device).expand(H, W).contiguous()
    rows = torch.arange(H, device=image.device)

    seams = []
    for i in range(n_seams):
        energy = compute_energy(scratch_image, scratch_protect, scratch_remove)
        seam = find_vertical_seam(energy)
        seams.append(origin[rows, seam])

        scratch_image = remove_seam(scratch_image, seam)
        origin = remove_seam(origin, seam)
        if scratch_protect is not None:
            scratch_protect = remove_seam(scratch_protect, seam)
        if scratch_remove is not None:
            scratch_remove = remove_seam(scratch_remove, seam)

        if (i + 1) % 20 == 0:
            logger.debug("Discovered %d/%d seams", i + 1, n_seams)

    return seams
