"""The default four-sphere scene.

Three unit-diameter spheres sit side by side on a large ground sphere, in
front of the default camera:

- center: diffuse, reddish (0.8, 0.3, 0.3)
- ground: diffuse, yellow (0.8, 0.8, 0.0), radius 100
- right: metal, gold (0.8, 0.6, 0.2)
- left: dielectric, glass (IOR 1.5)

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.default_scene import create_default_scene
    >>> from raycaster.camera.fixed import setup_camera
    >>>
    >>> scene, camera = create_default_scene()
    >>> setup_camera(camera)
"""

from dataclasses import dataclass

from raycaster.camera.fixed import Camera
from raycaster.scene.manager import SceneManager


@dataclass
class DefaultSceneParams:
    """Parameters of the default scene.

    Attributes:
        center_albedo: Albedo of the diffuse center sphere.
        ground_albedo: Albedo of the diffuse ground sphere.
        metal_albedo: Albedo of the metal sphere on the right.
        glass_ior: Index of refraction of the glass sphere on the left.
    """

    center_albedo: tuple[float, float, float] = (0.8, 0.3, 0.3)
    ground_albedo: tuple[float, float, float] = (0.8, 0.8, 0.0)
    metal_albedo: tuple[float, float, float] = (0.8, 0.6, 0.2)
    glass_ior: float = 1.5


def create_default_scene(
    params: DefaultSceneParams | None = None,
) -> tuple[SceneManager, Camera]:
    """Build the default scene in the global scene storage.

    Args:
        params: Optional material overrides. Uses the defaults when omitted.

    Returns:
        Tuple of (scene, camera). The camera still has to be loaded with
        setup_camera() before rendering.
    """
    if params is None:
        params = DefaultSceneParams()

    scene = SceneManager()
    scene.add_lambertian_sphere((0.0, 0.0, -1.0), 0.5, params.center_albedo)
    scene.add_lambertian_sphere((0.0, -100.5, -1.0), 100.0, params.ground_albedo)
    scene.add_metal_sphere((1.0, 0.0, -1.0), 0.5, params.metal_albedo)
    scene.add_dielectric_sphere((-1.0, 0.0, -1.0), 0.5, params.glass_ior)

    return scene, Camera()
