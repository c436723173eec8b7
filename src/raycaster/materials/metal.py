"""Metal (specular reflective) material implementation.

Metals are perfect mirrors tinted by their albedo. The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the outward surface normal. When
the reflection does not leave the surface (R . N <= 0, which happens for rays
arriving from inside the sphere) the ray is absorbed.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.materials.metal import scatter_metal
    >>> # Use within a Taichi kernel:
    >>> # direction, attenuation, did_scatter = scatter_metal(albedo, incident, normal)
"""

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import reflect

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_metal(albedo: vec3, incident_direction: vec3, normal: vec3):
    """Compute the reflected direction for a metal surface.

    Args:
        albedo: The reflective color (RGB, each component in [0, 1]).
        incident_direction: The incoming ray direction (unit length).
        normal: The outward surface normal (unit length).

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where:
        - scattered_direction: The mirror reflection, or the zero vector
          when absorbed.
        - attenuation: The albedo, or black when absorbed.
        - did_scatter: 1 if the reflection points away from the surface,
          0 if the ray is absorbed.
    """
    reflected = reflect(incident_direction, normal)

    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0
    if tm.dot(reflected, normal) > 0.0:
        scattered_direction = reflected
        attenuation = albedo
        did_scatter = 1

    return scattered_direction, attenuation, did_scatter


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of metal materials in the scene
MAX_METAL_MATERIALS = 256

# Storage for metal material properties
metal_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_METAL_MATERIALS)
num_metal_materials = ti.field(dtype=ti.i32, shape=())


def clear_metal_materials() -> None:
    """Clear all metal materials."""
    num_metal_materials[None] = 0


def add_metal_material(albedo: tuple[float, float, float]) -> int:
    """Add a metal material to the material registry.

    Args:
        albedo: The reflective color as (R, G, B) tuple.
            Each component must be in [0, 1].

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If any albedo component is outside [0, 1].
    """
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "A surface cannot reflect more light than it receives."
            )

    idx = num_metal_materials[None]
    if idx >= MAX_METAL_MATERIALS:
        raise RuntimeError(
            f"Maximum number of metal materials ({MAX_METAL_MATERIALS}) exceeded"
        )

    metal_albedos[idx] = vec3(albedo[0], albedo[1], albedo[2])
    num_metal_materials[None] = idx + 1
    return idx


def get_metal_material_count() -> int:
    """Get the number of metal materials in the registry."""
    return int(num_metal_materials[None])


@ti.func
def get_metal_albedo(material_idx: ti.i32) -> vec3:
    """Get the albedo for a metal material by index."""
    return metal_albedos[material_idx]


@ti.func
def scatter_metal_by_id(material_idx: ti.i32, incident_direction: vec3, normal: vec3):
    """Scatter off a registered metal material.

    Args:
        material_idx: The index of the material in the registry.
        incident_direction: The incoming ray direction (unit length).
        normal: The outward surface normal at the hit point.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter).
    """
    albedo = get_metal_albedo(material_idx)
    return scatter_metal(albedo, incident_direction, normal)
