"""Tests for the squish command line."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from PIL import Image
from squish.cli import main, default_seam_count
from squish.image_io import save_image

from conftest import make_step_pixels


@pytest.fixture
def step_png(tmp_path):
    """12x8 (W x H) black/white step image on disk."""
    path = tmp_path / "step.png"
    save_image(make_step_pixels(8, 12, edge_col=6), 12, 8, path)
    return path


class TestMain:
    def test_removes_requested_seams(self, step_png, tmp_path):
        out = tmp_path / "out.png"
        assert main([str(step_png), "-n", "3", "-o", str(out)]) == 0
        assert Image.open(out).size == (9, 8)

    def test_target_width(self, step_png, tmp_path):
        out = tmp_path / "out.png"
        assert main([str(step_png), "--width", "5", "-o", str(out)]) == 0
        assert Image.open(out).size == (5, 8)

    def test_default_output_name(self, step_png):
        assert main([str(step_png)]) == 0
        out = step_png.with_name("step_squished.png")
        assert Image.open(out).size == (12 - default_seam_count(12), 8)

    def test_debug_dir(self, step_png, tmp_path):
        debug = tmp_path / "debug"
        assert main([str(step_png), "-n", "2", "-o", str(tmp_path / "o.png"),
                     "--debug-dir", str(debug)]) == 0
        for name in ("intensity.pgm", "edges.pgm", "energy.pgm", "seams.png", "rank.pgm"):
            assert Image.open(debug / name).size == (12, 8), name

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "nope.png")]) == 1

    def test_too_many_seams(self, step_png):
        assert main([str(step_png), "-n", "13"]) == 2

    def test_target_width_out_of_range(self, step_png):
        assert main([str(step_png), "--width", "0"]) == 2

    def test_removing_every_column(self, step_png, tmp_path):
        assert main([str(step_png), "-n", "12", "-o", str(tmp_path / "o.png")]) == 2


class TestDefaultSeamCount:
    def test_ten_percent(self):
        assert default_seam_count(640) == 64

    def test_at_least_one(self):
        assert default_seam_count(3) == 1
