"""
Content-aware image shrinking with vertical seam carving.

Pipeline: rgb_to_intensity -> edge_detect -> min_vert_energy ->
find_vert_seam, repeated by find_n_vert_seams on a narrowing
copy of the energy map.
"""

__version__ = "0.1.0"

from .energy import rgb_to_intensity, edge_detect, normalize_energy, SOBEL_X, SOBEL_Y
from .seam import (min_vert_energy, find_vert_seam, find_n_vert_seams,
                   find_all_vert_seams, remove_seam, seam_columns, seam_rank_map)
from .carving import CarveResult, carve_pixels, carve_image, resize_to_width

__all__ = [
    'rgb_to_intensity',
    'edge_detect',
    'normalize_energy',
    'SOBEL_X',
    'SOBEL_Y',
    'min_vert_energy',
    'find_vert_seam',
    'find_n_vert_seams',
    'find_all_vert_seams',
    'remove_seam',
    'seam_columns',
    'seam_rank_map',
    'CarveResult',
    'carve_pixels',
    'carve_image',
    'resize_to_width',
]
