"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Spheres are the only primitive. Intersection routines are Taichi functions
so they can run inside the render kernels:

    record = hit_sphere(ray, sphere, t_min, t_max)
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_sphere

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
]
