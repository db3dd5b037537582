"""
Image decoding/encoding around the flat pixel buffers used by the core.
"""

import logging
from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np
import torch
from PIL import Image

from .energy import ArrayLike, as_field, as_pixels
from .seam import SeamLike, seam_columns

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_image(path: PathLike) -> Tuple[torch.Tensor, int, int]:
    """Load an image file as an RGB pixel buffer.

    Returns:
        (pixels (width * height, 3) uint8, width, height)
    """
    img = Image.open(path).convert('RGB')
    width, height = img.size
    img_array = np.array(img, dtype=np.uint8)
    pixels = torch.from_numpy(img_array).reshape(-1, 3)
    return pixels, width, height


def save_image(pixels: ArrayLike, width: int, height: int, path: PathLike):
    """Save an RGB pixel buffer; the extension picks the format."""
    pixels = as_pixels(pixels, width, height)
    img_array = pixels.reshape(height, width, 3).to(torch.uint8).cpu().numpy()
    Image.fromarray(img_array).save(path)
    logger.info(f"Saved: {path}")


def field_to_bytes(field: ArrayLike, width: int, height: int) -> np.ndarray:
    """Map a scalar field to 8-bit grayscale, scaled by its maximum.

    A field whose maximum is not positive is scaled by 1.
    """
    field = as_field(field, width, height)
    max_val = field.max().item()
    if max_val <= 0:
        max_val = 1.0
    scaled = torch.round((field * 255.0 / max_val).clamp(min=0.0, max=255.0))
    return scaled.to(torch.uint8).reshape(height, width).numpy()


def save_debug_map(field: ArrayLike, width: int, height: int, path: PathLike):
    """Save a scalar field (intensity, energy, ...) as a grayscale image.

    A ``.pgm`` path writes a binary (P5) PGM.
    """
    img = Image.fromarray(field_to_bytes(field, width, height))
    img.save(path)
    logger.info(f"Wrote debug map: {path}")


def draw_seams(pixels: ArrayLike, seams: Sequence[SeamLike], width: int,
               height: int, color: Tuple[int, int, int] = (255, 0, 0)) -> torch.Tensor:
    """Paint a seam set onto a copy of the original image."""
    pixels = as_pixels(pixels, width, height)
    columns = seam_columns(seams, width, height)

    grid = pixels.reshape(height, width, 3).to(torch.uint8).clone()
    rows = torch.arange(height)
    for seam_cols in columns:
        grid[rows, seam_cols] = torch.tensor(color, dtype=torch.uint8)

    return grid.reshape(-1, 3)


def save_seam_overlay(pixels: ArrayLike, seams: Sequence[SeamLike], width: int,
                      height: int, path: PathLike,
                      color: Tuple[int, int, int] = (255, 0, 0)):
    """Save the original image with the seam set painted in."""
    overlay = draw_seams(pixels, seams, width, height, color)
    save_image(overlay, width, height, path)
