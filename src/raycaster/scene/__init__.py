"""Scene module for world storage and scene building.

Components:
    world: Sphere storage and nearest-hit search
    manager: Scene manager coordinating spheres and materials
    default_scene: The default four-sphere scene

Scene data lives in Taichi fields in a structure-of-arrays layout and is
read-only while a render runs. The world is a flat list of spheres with no
spatial index.
"""

from .default_scene import DefaultSceneParams, create_default_scene
from .manager import (
    MAX_MATERIALS,
    MaterialInfo,
    MaterialType,
    SceneConfig,
    SceneManager,
    SphereInfo,
    get_material_type,
    get_material_type_index,
)
from .world import (
    MAX_SPHERES,
    WorldHitRecord,
    add_sphere,
    clear_world,
    get_sphere_count,
    intersect_world,
)

__all__ = [
    # World
    "WorldHitRecord",
    "add_sphere",
    "clear_world",
    "get_sphere_count",
    "intersect_world",
    "MAX_SPHERES",
    # Manager
    "SceneManager",
    "MaterialType",
    "MaterialInfo",
    "SphereInfo",
    "SceneConfig",
    "MAX_MATERIALS",
    "get_material_type",
    "get_material_type_index",
    # Default scene
    "create_default_scene",
    "DefaultSceneParams",
]
