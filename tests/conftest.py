"""Shared test fixtures for the squish test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


@pytest.fixture
def random_energy():
    """Random non-negative 20x30 (H x W) energy field, flat."""
    torch.manual_seed(42)
    return torch.rand(20 * 30), 30, 20


def make_uniform_pixels(H, W, value=128):
    """Flat RGB buffer where every pixel is (value, value, value)."""
    return torch.full((H * W, 3), value, dtype=torch.uint8)


def make_step_pixels(H, W, edge_col):
    """Black left of edge_col, white from edge_col on."""
    grid = torch.zeros(H, W, 3, dtype=torch.uint8)
    grid[:, edge_col:] = 255
    return grid.reshape(-1, 3)


def make_column_index_pixels(H, W):
    """Each pixel's R channel holds its column index."""
    cols = torch.arange(W).to(torch.uint8).unsqueeze(0).expand(H, W)
    return torch.stack([cols, cols, cols], dim=-1).reshape(-1, 3).clone()


def make_valley_energy(H, W, zero_cols):
    """Energy of ones with zero-energy columns at zero_cols, flat."""
    energy = torch.ones(H, W)
    for col in zero_cols:
        energy[:, col] = 0.0
    return energy.reshape(-1)
