"""
High-level carving functions that run the full shrink pipeline.

intensity -> edge energy -> multi-seam extraction -> pixel removal
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import torch

from .energy import ArrayLike, as_pixels, edge_detect, rgb_to_intensity
from .seam import SeamLike, find_n_vert_seams, min_vert_energy, seam_columns

logger = logging.getLogger(__name__)


@dataclass
class CarveResult:
    """Output of carve_image plus the intermediate maps that produced it."""
    pixels: torch.Tensor        # (width * height, 3) carved RGB
    width: int
    height: int
    intensity: torch.Tensor     # original-size fields
    energy: torch.Tensor
    min_energy: torch.Tensor
    seams: List[torch.Tensor]   # seam i relative to original width - i


def carve_pixels(pixels: ArrayLike, seams: Sequence[SeamLike], width: int,
                 height: int) -> Tuple[torch.Tensor, int]:
    """
    Delete a seam set from the original pixel buffer.

    The seams are first mapped to original columns and all of them are
    masked out at once, so no deletion shifts the position of another.

    Args:
        pixels: RGB pixel buffer (width * height, 3)
        seams: Seam set from find_n_vert_seams
        width, height: Original dimensions

    Returns:
        (carved pixel buffer, new width)
    """
    pixels = as_pixels(pixels, width, height)
    columns = seam_columns(seams, width, height)
    new_width = width - columns.shape[0]

    keep = torch.ones(height, width, dtype=torch.bool)
    rows = torch.arange(height)
    for seam_cols in columns:
        keep[rows, seam_cols] = False

    carved = pixels.reshape(height, width, 3)[keep].reshape(height * new_width, 3)
    return carved, new_width


def carve_image(pixels: ArrayLike, width: int, height: int,
                n_seams: int) -> CarveResult:
    """
    Shrink an image by ``n_seams`` columns with seam carving.

    Edge energy is computed once on the original image; the seams are
    then extracted from a progressively narrowed copy of it.

    Args:
        pixels: RGB pixel buffer (width * height, 3) or (height, width, 3)
        width, height: Image dimensions
        n_seams: Number of columns to remove, 0 <= n_seams <= width

    Returns:
        CarveResult with the carved image and intermediate maps
    """
    pixels = as_pixels(pixels, width, height)

    intensity = rgb_to_intensity(pixels, width, height)
    energy = edge_detect(intensity, width, height)
    min_energy = min_vert_energy(energy, width, height)

    logger.debug("Extracting %d seams from %dx%d image", n_seams, width, height)
    seams = find_n_vert_seams(n_seams, energy, width, height)

    carved, new_width = carve_pixels(pixels, seams, width, height)
    logger.debug("Carved image to %dx%d", new_width, height)

    return CarveResult(
        pixels=carved,
        width=new_width,
        height=height,
        intensity=intensity,
        energy=energy,
        min_energy=min_energy,
        seams=seams,
    )


def resize_to_width(pixels: ArrayLike, width: int, height: int,
                    target_width: int) -> CarveResult:
    """Carve an image down to ``target_width`` columns."""
    if not 1 <= target_width <= width:
        raise ValueError(
            f"need 1 <= target width <= {width}, got {target_width}")
    return carve_image(pixels, width, height, width - target_width)
