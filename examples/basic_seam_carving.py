"""
Basic seam carving example.

Carves an image, then plots the maps behind the result: edge energy,
accumulated minimum energy and the seam rank of every removed pixel.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import torch
import matplotlib.pyplot as plt

from squish.carving import carve_image
from squish.image_io import load_image, save_image, save_seam_overlay
from squish.seam import seam_rank_map


def main():
    image_path = sys.argv[1] if len(sys.argv) > 1 else '../output/test_river.png'
    output_dir = Path(__file__).parent.parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("Loading image...")
    pixels, W, H = load_image(image_path)
    print(f"Image size: {W} x {H}")

    n_seams = W // 4
    print(f"Carving image (removing {n_seams} seams)...")
    result = carve_image(pixels, W, H, n_seams)
    print(f"Carved size: {result.width} x {result.height}")

    save_image(result.pixels, result.width, result.height, output_dir / "carved.png")
    save_seam_overlay(pixels, result.seams, W, H, output_dir / "with_seams.png")

    ranks = seam_rank_map(result.seams, W, H).view(H, W)
    ranks = torch.where(ranks >= 0, ranks, torch.full_like(ranks, float('nan')))

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    axes[0].imshow(result.energy.view(H, W).numpy(), cmap='gray')
    axes[0].set_title('Edge energy')
    axes[1].imshow(result.min_energy.view(H, W).numpy(), cmap='magma')
    axes[1].set_title('Accumulated minimum energy')
    axes[2].imshow(ranks.numpy(), cmap='viridis')
    axes[2].set_title('Seam rank (earliest = most removable)')
    for ax in axes:
        ax.axis('off')

    plt.tight_layout()
    fig.savefig(output_dir / "seam_maps.png", dpi=100)
    print(f"Saved: {output_dir / 'seam_maps.png'}")

    print("\nDone! Check the output/ directory for results.")


if __name__ == '__main__':
    main()
