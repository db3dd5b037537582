"""
Create and save synthetic test images for seam carving.
Run this once to generate test_bagel.png and test_river.png
"""

import torch
import numpy as np
from PIL import Image
from pathlib import Path


def create_bagel_image(center, inner_radius, outer_radius, height, width):
    """Create a bagel/donut image with a hole and sesame seed texture.

    Args:
        center: (cx, cy) center of bagel
        inner_radius: Radius of hole
        outer_radius: Outer radius of bagel
        height, width: Image dimensions

    Returns:
        Image tensor (H, W) with values in [0, 1]
    """
    y = torch.arange(height, dtype=torch.float32)
    x = torch.arange(width, dtype=torch.float32)
    yy, xx = torch.meshgrid(y, x, indexing='ij')

    cx, cy = float(center[0]), float(center[1])
    dist = torch.sqrt((xx - cx)**2 + (yy - cy)**2)

    image = torch.where((dist >= inner_radius) & (dist <= outer_radius),
                        torch.tensor(0.8), torch.tensor(0.2))

    # Sesame seeds: small bright discs on the ring
    torch.manual_seed(42)
    for _ in range(100):
        angle = torch.rand(1) * 2 * np.pi
        radius = inner_radius + torch.rand(1) * (outer_radius - inner_radius)
        seed_x = cx + radius * torch.cos(angle)
        seed_y = cy + radius * torch.sin(angle)
        seed_dist = torch.sqrt((xx - seed_x)**2 + (yy - seed_y)**2)
        image = torch.where(seed_dist < 3.0, torch.tensor(0.95), image)

    return image


def create_river_image(height, width, band_width=50):
    """Bright sine-wave band across a dark, lightly noisy background."""
    y = torch.arange(height, dtype=torch.float32)
    x = torch.arange(width, dtype=torch.float32)
    yy, xx = torch.meshgrid(y, x, indexing='ij')

    center = height / 2 + 40 * torch.sin(2 * np.pi * xx / width)
    image = torch.where((yy - center).abs() < band_width,
                        torch.tensor(0.8), torch.tensor(0.2))

    torch.manual_seed(42)
    noise = (torch.rand(height, width) - 0.5) * 0.15
    return torch.clamp(image + noise, 0, 1)


def to_rgb_image(gray: torch.Tensor) -> Image.Image:
    """Gray tensor in [0, 1] to an RGB PIL image."""
    data = (gray.numpy() * 255).astype(np.uint8)
    return Image.fromarray(np.stack([data, data, data], axis=-1))


if __name__ == "__main__":
    output_dir = Path(__file__).parent.parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("Creating test images...")

    print("  - test_bagel.png")
    bagel = create_bagel_image(center=(250, 250), inner_radius=100, outer_radius=200,
                               height=500, width=500)
    to_rgb_image(bagel).save(output_dir / "test_bagel.png")

    print("  - test_river.png")
    river = create_river_image(height=400, width=500)
    to_rgb_image(river).save(output_dir / "test_river.png")

    print(f"\nSaved test images to {output_dir}/")
