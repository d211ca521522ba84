"""
Content-aware image resizing by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .energy import (gradient_magnitude_energy, normalize_energy, apply_masks,
                     compute_energy)
from .seam import (dp_seam, find_vertical_seam, find_horizontal_seam,
                   remove_seam, insert_seams, discover_seams)
from .orientation import transpose, transpose_state
from .carving import (
    CarveState,
    CarveStats,
    carve_step,
    shrink,
    expand,
    carve,
    resize_image,
)
from .carver import SeamCarver
from .exceptions import (SeamCarveError, LoadError, MaskLoadError,
                         InvalidTargetSize, SaveError, DetectionError)

__all__ = [
    'gradient_magnitude_energy',
    'normalize_energy',
    'apply_masks',
    'compute_energy',
    'dp_seam',
    'find_vertical_seam',
    'find_horizontal_seam',
    'remove_seam',
    'insert_seams',
    'discover_seams',
    'transpose',
    'transpose_state',
    'CarveState',
    'CarveStats',
    'carve_step',
    'shrink',
    'expand',
    'carve',
    'resize_image',
    'SeamCarver',
    'SeamCarveError',
    'LoadError',
    'MaskLoadError',
    'InvalidTargetSize',
    'SaveError',
    'DetectionError',
]
