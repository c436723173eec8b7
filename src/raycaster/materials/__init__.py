"""Materials module for surface scattering.

This module implements the three surface behaviors of the renderer:

Components:
    lambertian: Ideal diffuse reflection
    metal: Perfect mirror reflection tinted by an albedo
    dielectric: Glass-like refraction with reflection fallback

Each material provides a Taichi function
``scatter_*(...) -> (direction, attenuation, did_scatter)`` plus a field
registry (``add_*``, ``clear_*``, ``get_*``) used by the scene manager.
The set of materials is closed; the path tracer dispatches on
``raycaster.scene.manager.MaterialType``.
"""

from .dielectric import (
    DIELECTRIC_ATTENUATION,
    add_dielectric_material,
    clear_dielectric_materials,
    get_dielectric_ior,
    get_dielectric_material_count,
    scatter_dielectric,
    scatter_dielectric_by_id,
    will_reflect,
)
from .lambertian import (
    add_lambertian_material,
    clear_lambertian_materials,
    get_lambertian_albedo,
    get_lambertian_material_count,
    scatter_lambertian,
    scatter_lambertian_by_id,
)
from .metal import (
    add_metal_material,
    clear_metal_materials,
    get_metal_albedo,
    get_metal_material_count,
    scatter_metal,
    scatter_metal_by_id,
)

__all__ = [
    # Lambertian
    "scatter_lambertian",
    "scatter_lambertian_by_id",
    "add_lambertian_material",
    "clear_lambertian_materials",
    "get_lambertian_material_count",
    "get_lambertian_albedo",
    # Metal
    "scatter_metal",
    "scatter_metal_by_id",
    "add_metal_material",
    "clear_metal_materials",
    "get_metal_material_count",
    "get_metal_albedo",
    # Dielectric
    "DIELECTRIC_ATTENUATION",
    "scatter_dielectric",
    "scatter_dielectric_by_id",
    "add_dielectric_material",
    "clear_dielectric_materials",
    "get_dielectric_material_count",
    "get_dielectric_ior",
    "will_reflect",
]
