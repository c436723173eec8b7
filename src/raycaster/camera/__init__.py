"""Camera module for primary ray generation.

Components:
    fixed: Pinhole camera with a fixed virtual screen

Camera responsibilities:
    - Map normalized (u, v) image coordinates to world-space rays
    - Jitter rays inside a pixel for anti-aliasing
    - Derive screen geometry from look-at parameters

Image coordinates follow raster order:
    u in [0, 1]: left to right across the image
    v in [0, 1]: top to bottom across the image
"""

from .fixed import (
    Camera,
    get_camera_info,
    get_ray,
    get_ray_jittered,
    setup_camera,
)

__all__ = [
    "Camera",
    "setup_camera",
    "get_ray",
    "get_ray_jittered",
    "get_camera_info",
]
