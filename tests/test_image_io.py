"""Tests for image loading, saving and debug maps."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import torch
import pytest
from PIL import Image
from squish.image_io import (load_image, save_image, field_to_bytes, save_debug_map,
                             draw_seams, save_seam_overlay)

from conftest import make_column_index_pixels, make_step_pixels


class TestLoadSave:
    def test_png_roundtrip(self, tmp_path):
        torch.manual_seed(42)
        pixels = torch.randint(0, 256, (6 * 9, 3), dtype=torch.uint8)
        path = tmp_path / "img.png"
        save_image(pixels, 9, 6, path)

        loaded, width, height = load_image(path)
        assert (width, height) == (9, 6)
        assert loaded.shape == (54, 3)
        assert torch.equal(loaded, pixels)

    def test_load_converts_grayscale_to_rgb(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.fromarray(np.full((4, 5), 200, dtype=np.uint8)).save(path)
        pixels, width, height = load_image(path)
        assert (width, height) == (5, 4)
        assert (pixels == 200).all()

    def test_save_rejects_wrong_length(self, tmp_path):
        with pytest.raises(ValueError):
            save_image(torch.zeros(5, 3, dtype=torch.uint8), 2, 2, tmp_path / "x.png")


class TestDebugMaps:
    def test_scaled_by_maximum(self):
        data = field_to_bytes(torch.tensor([0.0, 0.25, 0.5, 2.0]), 2, 2)
        assert data.dtype == np.uint8
        assert data.tolist() == [[0, 32], [64, 255]]

    def test_all_zero_field(self):
        data = field_to_bytes(torch.zeros(6), 3, 2)
        assert (data == 0).all()

    def test_negative_values_clamped(self):
        data = field_to_bytes(torch.tensor([-1.0, 1.0]), 2, 1)
        assert data.tolist() == [[0, 255]]

    def test_writes_binary_pgm(self, tmp_path):
        path = tmp_path / "edges.pgm"
        save_debug_map(torch.tensor([0.0, 1.0, 0.5, 0.0]), 2, 2, path)

        assert path.read_bytes().startswith(b"P5")
        img = Image.open(path)
        assert img.mode == 'L'
        assert img.size == (2, 2)
        assert np.array(img).tolist() == [[0, 255], [128, 0]]


class TestSeamOverlay:
    def test_paints_original_columns(self):
        H, W = 2, 4
        pixels = make_column_index_pixels(H, W)
        overlay = draw_seams(pixels, [[1, 1], [1, 2]], W, H, color=(255, 0, 0))
        grid = overlay.view(H, W, 3)

        # second seam lands on original columns 2 and 3
        assert grid[0, 1].tolist() == [255, 0, 0]
        assert grid[0, 2].tolist() == [255, 0, 0]
        assert grid[1, 1].tolist() == [255, 0, 0]
        assert grid[1, 3].tolist() == [255, 0, 0]
        assert grid[0, 0].tolist() == [0, 0, 0]
        assert grid[1, 2].tolist() == [2, 2, 2]

    def test_original_untouched(self):
        pixels = make_step_pixels(3, 3, edge_col=1)
        before = pixels.clone()
        draw_seams(pixels, [[0, 0, 0]], 3, 3)
        assert torch.equal(pixels, before)

    def test_saves_full_size_image(self, tmp_path):
        path = tmp_path / "seams.png"
        save_seam_overlay(make_step_pixels(4, 6, edge_col=3), [[0, 0, 0, 0]], 6, 4, path)
        assert Image.open(path).size == (6, 4)
