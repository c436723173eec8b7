"""Ray data structure and vector utilities for the ray caster.

This module provides the Ray dataclass and the small set of vector helpers
the rest of the renderer is written against. All helpers are Taichi
functions so they can be called from inside kernels.

Vectors are plain ``taichi.math.vec3`` values: ``+``, ``-`` and ``*`` work
component-wise and a scalar multiplies every component, so only the
operations that need a name (dot, normalize, lerp, ...) live here.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> @ti.kernel
    ... def point() -> ti.math.vec3:
    ...     ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -2.0))
    ...     return ray_at(ray, 5.0)  # (0, 0, -5): direction was normalized
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and a unit direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Always unit length when
            the ray is built with make_ray().
    """

    origin: vec3
    direction: vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray, normalizing the direction.

    Intersection math assumes unit-length directions, so every ray the
    renderer creates goes through this function.

    Args:
        origin: The starting point of the ray.
        direction: Any non-zero direction vector.

    Returns:
        A new Ray whose direction has unit length.
    """
    return Ray(origin=origin, direction=normalize(direction))


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than the length when only comparing magnitudes, since it skips
    the square root.
    """
    return tm.dot(v, v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The input must not be the zero vector; callers are responsible for
    never building degenerate directions or normals.
    """
    return v / ti.sqrt(tm.dot(v, v))


@ti.func
def lerp(a: vec3, b: vec3, t: ti.f32) -> vec3:
    """Linearly interpolate between a (t = 0) and b (t = 1)."""
    return a * (1.0 - t) + b * t


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is near zero in all components.

    Returns:
        1 if all components are below 1e-8 in magnitude, 0 otherwise.
    """
    s = 1e-8
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes ``incident - 2 (incident . normal) normal``. The normal should be
    unit length for correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * tm.dot(incident, normal) * normal


@ti.func
def refract(incident: vec3, normal: vec3, ratio: ti.f32) -> vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    With ``cos = incident . normal`` the discriminant is
    ``1 - ratio^2 (1 - cos^2)``. A non-positive discriminant means no real
    refraction exists (total internal reflection).

    Args:
        incident: The incoming direction (unit length).
        normal: The surface normal facing against the incident ray.
        ratio: Ratio of refractive indices n1 / n2.

    Returns:
        The refracted direction, or the zero vector when the discriminant is
        not positive.
    """
    cos_theta = tm.dot(incident, normal)
    discriminant = 1.0 - ratio * ratio * (1.0 - cos_theta * cos_theta)
    result = vec3(0.0, 0.0, 0.0)
    if discriminant > 0.0:
        result = ratio * incident + normal * (-ratio * cos_theta - ti.sqrt(discriminant))
    return result


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


@ti.func
def random_in_unit_sphere() -> vec3:
    """Generate a random point strictly inside the unit sphere.

    Rejection sampling: draw points uniformly in [-1, 1]^3 until one has a
    squared length below 1. Draws come from Taichi's per-thread generator,
    so parallel pixels never share random state.

    Returns:
        A random point with squared length < 1.
    """
    p = vec3(1.0, 1.0, 1.0)
    while length_squared(p) >= 1.0:
        p = vec3(
            ti.random(ti.f32) * 2.0 - 1.0,
            ti.random(ti.f32) * 2.0 - 1.0,
            ti.random(ti.f32) * 2.0 - 1.0,
        )
    return p
