"""
squish CLI

Shrink an image's width with seam carving.

Usage:
    squish photo.jpg -n 50 -o narrow.png
    squish photo.jpg --width 640 --debug-dir ./debug -v
"""

import argparse
import logging
import sys
from pathlib import Path

import torch

from .carving import carve_image
from .image_io import load_image, save_debug_map, save_image, save_seam_overlay
from .seam import seam_rank_map

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(message)s'
)
logger = logging.getLogger(__name__)


def default_seam_count(width: int) -> int:
    """10% of the width, at least one seam."""
    return max(1, width // 10)


def write_debug_maps(result, original_pixels, original_width, debug_dir: Path):
    """Write intensity, energy, accumulated energy, seam overlay and rank maps."""
    debug_dir.mkdir(parents=True, exist_ok=True)
    height = result.height

    save_debug_map(result.intensity, original_width, height, debug_dir / "intensity.pgm")
    save_debug_map(result.energy, original_width, height, debug_dir / "edges.pgm")
    save_debug_map(result.min_energy, original_width, height, debug_dir / "energy.pgm")

    if result.seams:
        save_seam_overlay(original_pixels, result.seams, original_width, height,
                          debug_dir / "seams.png")

        # Earliest seams brightest, untouched pixels black
        ranks = seam_rank_map(result.seams, original_width, height)
        brightness = torch.where(ranks >= 0, len(result.seams) - ranks,
                                 torch.zeros_like(ranks))
        save_debug_map(brightness, original_width, height, debug_dir / "rank.pgm")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Shrink image width with content-aware seam carving",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Image to squish (any format Pillow can read)"
    )

    size = parser.add_mutually_exclusive_group()
    size.add_argument(
        "-n", "--seams",
        type=int,
        default=None,
        help="Number of columns to remove (default: 10%% of the width)"
    )
    size.add_argument(
        "--width",
        type=int,
        default=None,
        help="Target width in pixels"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output image path (default: <input>_squished.png)"
    )

    parser.add_argument(
        "--debug-dir",
        type=Path,
        default=None,
        help="Write intensity/edge/energy/seam debug images here"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.input.exists():
        logger.error(f"Input path does not exist: {args.input}")
        return 1

    pixels, width, height = load_image(args.input)
    logger.info(f"Loaded {args.input.name}: {width}x{height}")

    if args.width is not None:
        n_seams = width - args.width
    elif args.seams is not None:
        n_seams = args.seams
    else:
        n_seams = default_seam_count(width)

    try:
        if args.width is not None and not 1 <= args.width <= width:
            raise ValueError(f"need 1 <= target width <= {width}, got {args.width}")
        result = carve_image(pixels, width, height, n_seams)
    except ValueError as e:
        logger.error(f"error: {e}")
        return 2

    logger.info(f"Removed {len(result.seams)} seams: {width}x{height} -> "
                f"{result.width}x{result.height}")

    if args.debug_dir is not None:
        write_debug_maps(result, pixels, width, args.debug_dir)

    output_path = args.output
    if output_path is None:
        output_path = args.input.with_name(f"{args.input.stem}_squished.png")

    if result.width == 0:
        logger.error("error: nothing left to save, every column was removed")
        return 2

    save_image(result.pixels, result.width, result.height, output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
