"""Monte Carlo ray caster built on Taichi.

This package renders a small scene of spheres by casting many randomly
jittered rays per pixel and following each ray as it scatters off
diffuse, metallic and glass surfaces, with a procedural sky as the only
light source.

Subpackages:
    core: Rays, vector utilities, the color estimator and the render driver
    geometry: Sphere primitive and ray-sphere intersection
    materials: Lambertian, metal and dielectric scattering
    scene: World storage, nearest-hit search and scene building
    camera: Fixed virtual-screen camera
    preview: PNG export and image comparison utilities
"""

__version__ = "0.1.0"
