"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Everything here works on flat row-major buffers addressed by
``y * width + x``: pixel buffers of shape (width * height, 3) and scalar
fields of shape (width * height,).
"""

import torch
import torch.nn.functional as F
from typing import Sequence, Union

ArrayLike = Union[torch.Tensor, Sequence]

# REC.601 luma weights (R, G, B)
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

# Normalized Sobel operator, applied as a correlation (no kernel flip).
SOBEL_X = torch.tensor([[-1 / 8, 0.0, 1 / 8],
                        [-1 / 4, 0.0, 1 / 4],
                        [-1 / 8, 0.0, 1 / 8]])

SOBEL_Y = torch.tensor([[-1 / 8, -1 / 4, -1 / 8],
                        [ 0.0,    0.0,    0.0],
                        [ 1 / 8,  1 / 4,  1 / 8]])


def check_dims(width: int, height: int):
    """Raise ValueError unless both dimensions are positive."""
    if width <= 0:
        raise ValueError(f"need non-zero width, got {width}")
    if height <= 0:
        raise ValueError(f"need non-zero height, got {height}")


def as_field(data: ArrayLike, width: int, height: int,
             name: str = 'field') -> torch.Tensor:
    """Validate a scalar field and return it as a flat float32 tensor.

    Accepts anything ``torch.as_tensor`` does, flat or shaped (H, W).
    The returned tensor may share memory with ``data``; callers that
    mutate it must clone first.
    """
    check_dims(width, height)
    field = torch.as_tensor(data, dtype=torch.float32).reshape(-1)
    if field.numel() != width * height:
        raise ValueError(
            f"need {name} array to match width*height "
            f"({field.numel()} != {width} * {height})")
    return field


def as_pixels(pixels: ArrayLike, width: int, height: int) -> torch.Tensor:
    """Validate an RGB pixel buffer and return it as a (width * height, 3) tensor."""
    check_dims(width, height)
    pixels = torch.as_tensor(pixels)
    if pixels.dim() < 1 or pixels.shape[-1] != 3:
        raise ValueError(f"need RGB triples, got shape {tuple(pixels.shape)}")
    pixels = pixels.reshape(-1, 3)
    if pixels.shape[0] != width * height:
        raise ValueError(
            f"need color data array to match width*height "
            f"({pixels.shape[0]} != {width} * {height})")
    return pixels


def rgb_to_intensity(pixels: ArrayLike, width: int, height: int) -> torch.Tensor:
    """
    Convert an RGB pixel buffer to luminance in [0, 1].

    luminance = 0.299 * R/255 + 0.587 * G/255 + 0.114 * B/255

    Args:
        pixels: RGB bytes, (width * height, 3) or (height, width, 3)
        width, height: Image dimensions

    Returns:
        Intensity field (width * height,) float32
    """
    pixels = as_pixels(pixels, width, height)

    # Accumulate in double so white lands on exactly 1.0 after the cast
    weights = torch.tensor(LUMA_WEIGHTS, dtype=torch.float64)
    intensity = (pixels.to(torch.float64) / 255.0) @ weights

    return intensity.to(torch.float32).clamp_(0.0, 1.0)


def edge_detect(intensity: ArrayLike, width: int, height: int) -> torch.Tensor:
    """
    Compute gradient magnitude energy of an intensity field.

    Each pixel's 3x3 neighborhood is sampled with out-of-bounds
    coordinates clamped to the border (edge replication), then
    correlated with SOBEL_X and SOBEL_Y:

        E(x, y) = sqrt(Gx(x, y)^2 + Gy(x, y)^2)

    The kernels are applied in factored form, a central difference along
    one axis followed by [1, 2, 1] / 8 smoothing along the other. This is
    the same operator, but a flat region differences to exactly zero.

    Args:
        intensity: Intensity field (width * height,)
        width, height: Image dimensions

    Returns:
        Energy field (width * height,), not normalized
    """
    gray = as_field(intensity, width, height, 'intensity')
    gray = gray.view(1, 1, height, width)

    padded = F.pad(gray, (1, 1, 1, 1), mode='replicate')[0, 0]

    # Central differences: (H + 2, W) across columns, (H, W + 2) across rows
    diff_x = padded[:, 2:] - padded[:, :-2]
    diff_y = padded[2:, :] - padded[:-2, :]

    grad_x = (diff_x[:-2] + 2.0 * diff_x[1:-1] + diff_x[2:]) / 8.0
    grad_y = (diff_y[:, :-2] + 2.0 * diff_y[:, 1:-1] + diff_y[:, 2:]) / 8.0

    energy = torch.sqrt(grad_x ** 2 + grad_y ** 2)

    return energy.reshape(-1).contiguous()


def normalize_energy(energy: ArrayLike) -> torch.Tensor:
    """Scale a field by its maximum so it lies in [0, 1].

    Only used for visualization; a monotonic transform, so seam
    positions are unchanged. A field with no positive value maps
    to zeros.
    """
    energy = torch.as_tensor(energy, dtype=torch.float32)
    if energy.numel() == 0:
        return energy.clone()
    e_max = energy.max()
    if e_max <= 0:
        return torch.zeros_like(energy)
    return (energy / e_max).clamp(min=0.0)
