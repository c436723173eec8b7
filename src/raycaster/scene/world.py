"""World storage and nearest-hit search.

The world is a flat list of spheres held in Taichi fields. Each sphere has
an associated material ID for shading. There is no spatial index: every
query visits every sphere once.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.world import add_sphere, clear_world, intersect_world
    >>> clear_world()
    >>> add_sphere(vec3(0, 0, -1), 0.5, material_id=0)
    >>> # Use intersect_world within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray
from raycaster.geometry.sphere import HitRecord, Sphere, hit_sphere

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class WorldHitRecord:
    """Record of a ray-world intersection with material information.

    Attributes:
        hit: Whether the ray intersected any sphere (1 if hit, 0 if miss).
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray intersected the surface.
        normal: The outward surface normal at the intersection (unit length).
        material_id: The material ID of the hit sphere, -1 on a miss.

    Only material_id is meaningful when hit == 0.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material_id: ti.i32


# Maximum number of spheres supported in the world
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_world() -> None:
    """Remove all spheres from the world.

    Resets the sphere count to zero. The field data is overwritten when new
    spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(center: vec3, radius: float, material_id: int = 0) -> int:
    """Add a sphere to the world.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (should be positive).
        material_id: The material ID to associate with this sphere.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = center
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the world."""
    return int(num_spheres[None])


@ti.func
def _to_world_hit_record(rec: HitRecord, material_id: ti.i32) -> WorldHitRecord:
    """Attach a material ID to a sphere hit record."""
    return WorldHitRecord(
        hit=rec.hit,
        t=rec.t,
        point=rec.point,
        normal=rec.normal,
        material_id=material_id,
    )


@ti.func
def _make_miss_record() -> WorldHitRecord:
    """Create a WorldHitRecord indicating no intersection."""
    return WorldHitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material_id=-1,
    )


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Load the sphere stored at index."""
    return Sphere(center=sphere_centers[index], radius=sphere_radii[index])


@ti.func
def intersect_world(ray: Ray, t_min: ti.f32, t_max: ti.f32) -> WorldHitRecord:
    """Find the nearest intersection of a ray with the world.

    Scans every sphere in storage order. The upper bound shrinks to the best
    t found so far, so a later sphere only replaces the current hit when it
    is strictly closer; on equal t the earlier sphere wins.

    Args:
        ray: The ray to test (unit-length direction).
        t_min: Exclusive lower bound on t.
        t_max: Exclusive upper bound on t.

    Returns:
        The nearest hit in (t_min, t_max), or a miss record.
    """
    closest_t = t_max
    result = _make_miss_record()

    for i in range(num_spheres[None]):
        rec = hit_sphere(ray, get_sphere(i), t_min, closest_t)
        if rec.hit == 1:
            closest_t = rec.t
            result = _to_world_hit_record(rec, sphere_material_ids[i])

    return result
