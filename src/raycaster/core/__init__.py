"""Core rendering module.

This module contains the fundamental building blocks for ray casting:

Components:
    ray: Ray data structure, vector helpers and random sampling
    integrator: Recursive color estimation, pixel encoding and render kernels
    renderer: Host-side render driver with progress and cancellation

The core module estimates incoming light along randomly jittered camera rays
by following the scattering chain of each ray through the scene until it
leaves the scene, is absorbed, or exhausts the bounce budget.

All per-ray computation runs inside Taichi kernels.
"""

from .ray import (
    Ray,
    dot,
    length_squared,
    lerp,
    make_ray,
    near_zero,
    normalize,
    random_in_unit_sphere,
    ray_at,
    reflect,
    refract,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from raycaster.core.integrator or raycaster.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "length_squared",
    "normalize",
    "lerp",
    "near_zero",
    "reflect",
    "refract",
    "random_in_unit_sphere",
]
