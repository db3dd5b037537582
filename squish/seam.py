"""
Seam computation algorithms.

Vertical seams only. The minimum-energy map is accumulated bottom-up,
so the top row holds the cost of the cheapest full seam starting at
each column, and the seam is backtracked from the top down.

Ties are broken by the first (leftmost) minimum everywhere, so seam
selection is deterministic.
"""

import logging

import torch
from typing import List, Sequence, Union

from .energy import ArrayLike, as_field, check_dims

logger = logging.getLogger(__name__)

SeamLike = Union[torch.Tensor, Sequence[int]]


def min_vert_energy(energy: ArrayLike, width: int, height: int) -> torch.Tensor:
    """
    Accumulate minimum path energy from the bottom row upward.

    M(x, H-1) = E(x, H-1)
    M(x, y)   = E(x, y) + min(M(x-1, y+1), M(x, y+1), M(x+1, y+1))

    with x-1 and x+1 clamped into [0, width-1].

    Args:
        energy: Energy field (width * height,)
        width, height: Image dimensions

    Returns:
        Accumulated energy field (width * height,)
    """
    min_energy = as_field(energy, width, height, 'energy').clone()
    rows = min_energy.view(height, width)

    # Bottom row is the base case
    for y in range(height - 2, -1, -1):
        below = rows[y + 1]
        below_left = torch.cat([below[:1], below[:-1]])
        below_right = torch.cat([below[1:], below[-1:]])
        rows[y] += torch.minimum(torch.minimum(below_left, below), below_right)

    return min_energy


def find_vert_seam(min_energy: ArrayLike, width: int, height: int) -> torch.Tensor:
    """
    Backtrack the lowest-cost vertical seam through an accumulated map.

    Starts at the leftmost minimum of the top row, then at each row
    below picks the leftmost minimum among the (up to) three columns
    adjacent to the previous one.

    Args:
        min_energy: Accumulated energy from min_vert_energy (width * height,)
        width, height: Image dimensions

    Returns:
        Seam (height,) with one column index per row, top row first
    """
    rows = as_field(min_energy, width, height, 'energy').view(height, width)

    seam = torch.zeros(height, dtype=torch.long)
    # torch.argmin returns the first minimal index
    prev_col = torch.argmin(rows[0]).item()
    seam[0] = prev_col

    for i in range(1, height):
        left = max(0, prev_col - 1)
        right = min(width - 1, prev_col + 1)
        neighbors = rows[i, left:right + 1]
        prev_col = left + torch.argmin(neighbors).item()
        seam[i] = prev_col

    return seam


def check_seam(seam: SeamLike, width: int, height: int) -> torch.Tensor:
    """Validate a seam against (width, height) and return it as a long tensor."""
    check_dims(width, height)
    seam = torch.as_tensor(seam, dtype=torch.long).reshape(-1)
    if seam.numel() != height:
        raise ValueError(f"need one seam index per row ({seam.numel()} != {height})")
    if (seam < 0).any() or (seam >= width).any():
        raise ValueError(f"seam index out of range for width {width}")
    return seam


def remove_seam(data: ArrayLike, seam: SeamLike, width: int,
                height: int) -> torch.Tensor:
    """
    Remove a vertical seam from a row-major flat buffer.

    Works on scalar fields (width * height,) and on pixel buffers
    (width * height, C); any trailing dimensions are kept.

    Args:
        data: Buffer whose first dimension is width * height
        seam: Column index per row
        width, height: Dimensions of ``data``

    Returns:
        Buffer with first dimension (width - 1) * height
    """
    seam = check_seam(seam, width, height)
    data = torch.as_tensor(data)
    if data.dim() == 0 or data.shape[0] != width * height:
        raise ValueError(
            f"need data array to match width*height "
            f"({data.shape[0] if data.dim() else 0} != {width} * {height})")

    trailing = data.shape[1:]
    keep = torch.ones(height, width, dtype=torch.bool)
    keep[torch.arange(height), seam] = False

    grid = data.reshape(height, width, *trailing)
    return grid[keep].reshape(height * (width - 1), *trailing)


def find_n_vert_seams(n: int, energy: ArrayLike, width: int,
                      height: int) -> List[torch.Tensor]:
    """
    Extract ``n`` seams one after another.

    Each seam is found on the accumulated map of the working energy,
    then removed from the working energy before the next search. Edge
    energy is not recomputed between seams. Seam ``i`` is therefore
    relative to a field of width ``width - i``.

    Args:
        n: Number of seams, 0 <= n <= width
        energy: Edge energy field (width * height,), not accumulated
        width, height: Image dimensions

    Returns:
        List of n seams in the order they were found (most removable first)
    """
    working = as_field(energy, width, height, 'energy')
    if not 0 <= n <= width:
        raise ValueError(f"need 0 <= n <= width, got n={n} for width {width}")

    seams = []
    working_width = width

    for i in range(n):
        min_energy = min_vert_energy(working, working_width, height)
        seam = find_vert_seam(min_energy, working_width, height)
        working = remove_seam(working, seam, working_width, height)
        working_width -= 1
        seams.append(seam)

        if (i + 1) % 50 == 0:
            logger.debug("Found %d/%d seams, width now %d", i + 1, n, working_width)

    return seams


def find_all_vert_seams(energy: ArrayLike, width: int,
                        height: int) -> List[torch.Tensor]:
    """Extract every column as a seam, ranked by discovery order."""
    return find_n_vert_seams(width, energy, width, height)


def seam_columns(seams: Sequence[SeamLike], width: int, height: int) -> torch.Tensor:
    """
    Map a seam set back to columns of the original image.

    Seam ``i`` of a set from find_n_vert_seams indexes a field already
    narrowed by ``i`` columns. This replays the removals on a grid of
    original column numbers to recover where each seam really was.

    Args:
        seams: Seam set, seam i relative to width - i
        width, height: Original dimensions

    Returns:
        Tensor (len(seams), height) of original column indices
    """
    check_dims(width, height)
    if len(seams) > width:
        raise ValueError(f"{len(seams)} seams cannot fit in width {width}")

    remaining = torch.arange(width, dtype=torch.long).repeat(height)
    columns = torch.zeros(len(seams), height, dtype=torch.long)
    rows = torch.arange(height)

    current_width = width
    for i, seam in enumerate(seams):
        seam = check_seam(seam, current_width, height)
        columns[i] = remaining.view(height, current_width)[rows, seam]
        remaining = remove_seam(remaining, seam, current_width, height)
        current_width -= 1

    return columns


def seam_rank_map(seams: Sequence[SeamLike], width: int, height: int) -> torch.Tensor:
    """
    Rank of the seam that removed each pixel.

    Args:
        seams: Seam set, seam i relative to width - i
        width, height: Original dimensions

    Returns:
        Field (width * height,) float32 holding the 0-based seam index
        per pixel, or -1 where no seam passed
    """
    columns = seam_columns(seams, width, height)
    ranks = torch.full((height, width), -1.0)
    rows = torch.arange(height)

    for i in range(columns.shape[0]):
        ranks[rows, columns[i]] = float(i)

    return ranks.reshape(-1)
