"""Dielectric (glass/water) material implementation.

Dielectrics refract light according to Snell's law and fall back to mirror
reflection when refraction is impossible (total internal reflection).

The side of the surface is read from the incoming direction: hit records
always carry the outward sphere normal, so ``d . n > 0`` means the ray is
leaving the material. In that case the ratio of indices is ``ior`` and the
normal is flipped to face the ray; entering rays use ``1 / ior`` and the
normal as given.

There is no Fresnel-weighted choice between reflection and refraction: a
ray refracts whenever it can. Every scatter is tinted by the fixed
DIELECTRIC_ATTENUATION, which has no blue component.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.materials.dielectric import scatter_dielectric
    >>> # Use within a Taichi kernel:
    >>> # direction, attenuation, did_scatter = scatter_dielectric(ior, incident, normal)
"""

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import length_squared, reflect, refract

# Type alias for 3D vectors
vec3 = tm.vec3

# Attenuation applied on every dielectric scatter (yellow tint, blue absorbed)
DIELECTRIC_ATTENUATION = vec3(1.0, 1.0, 0.0)


@ti.func
def _orient(ior: ti.f32, incident_direction: vec3, normal: vec3):
    """Pick the refraction ratio and the normal facing the incident ray."""
    ratio = 1.0 / ior
    facing_normal = normal
    if tm.dot(incident_direction, normal) > 0.0:
        # Leaving the material
        ratio = ior
        facing_normal = -normal
    return ratio, facing_normal


@ti.func
def scatter_dielectric(ior: ti.f32, incident_direction: vec3, normal: vec3):
    """Compute the scattered direction for a dielectric surface.

    Args:
        ior: Index of refraction of the material (> 1).
        incident_direction: The incoming ray direction (unit length).
        normal: The outward surface normal (unit length).

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where:
        - scattered_direction: The refracted direction, or the reflection
          about the ray-facing normal under total internal reflection.
        - attenuation: DIELECTRIC_ATTENUATION.
        - did_scatter: Always 1 for dielectrics.
    """
    ratio, facing_normal = _orient(ior, incident_direction, normal)

    scattered_direction = refract(incident_direction, facing_normal, ratio)
    if length_squared(scattered_direction) <= 0.0:
        scattered_direction = reflect(incident_direction, facing_normal)

    attenuation = DIELECTRIC_ATTENUATION
    did_scatter = 1

    return scattered_direction, attenuation, did_scatter


@ti.func
def will_reflect(ior: ti.f32, incident_direction: vec3, normal: vec3) -> ti.i32:
    """Determine if total internal reflection will occur.

    Args:
        ior: Index of refraction of the material.
        incident_direction: The incoming ray direction (unit length).
        normal: The outward surface normal (unit length).

    Returns:
        1 if no real refraction exists and the ray will be reflected, 0 otherwise.
    """
    ratio, facing_normal = _orient(ior, incident_direction, normal)
    refracted = refract(incident_direction, facing_normal, ratio)
    result = 0
    if length_squared(refracted) <= 0.0:
        result = 1
    return result


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of dielectric materials in the scene
MAX_DIELECTRIC_MATERIALS = 256

# Storage for dielectric material properties
dielectric_iors = ti.field(dtype=ti.f32, shape=MAX_DIELECTRIC_MATERIALS)
num_dielectric_materials = ti.field(dtype=ti.i32, shape=())


def clear_dielectric_materials() -> None:
    """Clear all dielectric materials."""
    num_dielectric_materials[None] = 0


def add_dielectric_material(ior: float = 1.5) -> int:
    """Add a dielectric material to the material registry.

    Args:
        ior: Index of refraction. Default is 1.5 (typical glass).
            Must be greater than 1.0.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If IOR is not greater than 1.0.
    """
    if ior <= 1.0:
        raise ValueError(
            f"Index of refraction = {ior} must be greater than 1.0."
        )

    idx = num_dielectric_materials[None]
    if idx >= MAX_DIELECTRIC_MATERIALS:
        raise RuntimeError(
            f"Maximum number of dielectric materials ({MAX_DIELECTRIC_MATERIALS}) exceeded"
        )

    dielectric_iors[idx] = ior
    num_dielectric_materials[None] = idx + 1
    return idx


def get_dielectric_material_count() -> int:
    """Get the number of dielectric materials in the registry."""
    return int(num_dielectric_materials[None])


@ti.func
def get_dielectric_ior(material_idx: ti.i32) -> ti.f32:
    """Get the IOR for a dielectric material by index."""
    return dielectric_iors[material_idx]


@ti.func
def scatter_dielectric_by_id(material_idx: ti.i32, incident_direction: vec3, normal: vec3):
    """Scatter off a registered dielectric material.

    Args:
        material_idx: The index of the material in the registry.
        incident_direction: The incoming ray direction (unit length).
        normal: The outward surface normal at the hit point.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter).
    """
    ior = get_dielectric_ior(material_idx)
    return scatter_dielectric(ior, incident_direction, normal)
