"""Sphere primitive with ray-sphere intersection.

The intersection solves ``|ray_at(ray, t) - center|^2 = radius^2`` as a
quadratic in t and returns the nearest root that lies strictly inside the
caller's (t_min, t_max) interval.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.geometry.sphere import Sphere, HitRecord, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray, normalize, ray_at

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        hit: Whether the ray intersected the sphere (1 if hit, 0 if miss).
        t: The parameter value along the ray where intersection occurred.
            Only valid if hit == 1.
        point: The 3D point where the ray intersected the sphere.
            Only valid if hit == 1.
        normal: The surface normal at the intersection point (unit length,
            always points outward from the sphere center, whichever side
            the ray came from). Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Test for ray-sphere intersection.

    With ``oc = origin - center`` the quadratic coefficients are:
        a = dot(direction, direction)
        b = 2 * dot(direction, oc)
        c = dot(oc, oc) - radius^2

    A discriminant ``b^2 - 4ac`` that is not positive is a miss (tangent
    rays included). Otherwise the smaller root is tested first and the
    larger one only if the smaller falls outside (t_min, t_max), so the
    nearest valid intersection is the one reported.

    Args:
        ray: The ray to test (unit-length direction).
        sphere: The sphere to test intersection against.
        t_min: Exclusive lower bound on t (avoids self-intersection).
        t_max: Exclusive upper bound on t.

    Returns:
        A HitRecord. When hit == 0 the remaining fields carry no meaning.
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    b = 2.0 * tm.dot(ray.direction, oc)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - 4.0 * a * c

    # Initialize result fields (Taichi requires outer-scope declaration)
    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if discriminant > 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t = (-b - sqrt_d) / (2.0 * a)
        valid = (t > t_min) and (t < t_max)

        if not valid:
            t = (-b + sqrt_d) / (2.0 * a)
            valid = (t > t_min) and (t < t_max)

        if valid:
            did_hit = 1
            hit_t = t
            hit_point = ray_at(ray, t)
            hit_normal = normalize(hit_point - sphere.center)

    return HitRecord(hit=did_hit, t=hit_t, point=hit_point, normal=hit_normal)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius inside a Taichi kernel."""
    return Sphere(center=center, radius=radius)
