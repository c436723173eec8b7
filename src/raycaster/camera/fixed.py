"""Fixed virtual-screen camera for primary ray generation.

The camera is a pinhole at ``origin`` looking through a rectangular virtual
screen. The screen is described by three vectors, all relative to the
origin:

- top_left_corner: from the origin to the top-left corner of the screen
- horizontal: spans the screen from its left edge to its right edge
- vertical: spans the screen from its top edge to its bottom edge

Normalized image coordinates therefore follow image conventions:
u = 0 is the left edge, v = 0 is the top row.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.camera.fixed import Camera, setup_camera, get_ray
    >>>
    >>> setup_camera(Camera())  # the classic 4 x 2 screen at z = -1
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.5, 0.5)  # Ray through image center
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti

from raycaster.core.ray import Ray, make_ray

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Virtual screen geometry of a pinhole camera.

    The defaults describe a camera at the world origin looking down -z
    through a 4 x 2 screen one unit away, suited to a 2:1 image.

    Attributes:
        origin: Camera position in world space.
        top_left_corner: Offset from the origin to the top-left screen corner.
        horizontal: Full-width screen vector (left to right).
        vertical: Full-height screen vector (top to bottom).
    """

    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    top_left_corner: tuple[float, float, float] = (-2.0, 1.0, -1.0)
    horizontal: tuple[float, float, float] = (4.0, 0.0, 0.0)
    vertical: tuple[float, float, float] = (0.0, -2.0, 0.0)

    @classmethod
    def from_look_at(
        cls,
        lookfrom: tuple[float, float, float],
        lookat: tuple[float, float, float],
        vup: tuple[float, float, float] = (0.0, 1.0, 0.0),
        vfov: float = 90.0,
        aspect_ratio: float = 2.0,
    ) -> "Camera":
        """Build the screen geometry for a look-at pinhole camera.

        The screen sits at unit distance in front of ``lookfrom``.
        ``Camera.from_look_at((0, 0, 0), (0, 0, -1), vfov=90, aspect_ratio=2)``
        reproduces the default camera.

        Args:
            lookfrom: Camera position in world space.
            lookat: Point the camera is looking at.
            vup: Up direction used to orient the screen.
            vfov: Vertical field of view in degrees.
            aspect_ratio: Width divided by height of the output image.

        Returns:
            A Camera whose screen matches the requested view.

        Raises:
            ValueError: If vfov is outside (0, 180), aspect_ratio is not
                positive, lookfrom equals lookat, or vup is parallel to the
                view direction.
        """
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {vfov}")
        if aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")

        viewport_height = 2.0 * math.tan(math.radians(vfov) / 2.0)
        viewport_width = aspect_ratio * viewport_height

        eye = np.array(lookfrom, dtype=np.float64)
        w = eye - np.array(lookat, dtype=np.float64)
        w_norm = np.linalg.norm(w)
        if w_norm == 0.0:
            raise ValueError("lookfrom and lookat must be different points")
        w = w / w_norm

        u = np.cross(np.array(vup, dtype=np.float64), w)
        u_norm = np.linalg.norm(u)
        if u_norm == 0.0:
            raise ValueError("vup must not be parallel to the view direction")
        u = u / u_norm
        v = np.cross(w, u)

        horizontal = viewport_width * u
        # Screen rows run downward
        vertical = -viewport_height * v
        top_left = -w - horizontal / 2.0 - vertical / 2.0

        return cls(
            origin=tuple(float(x) for x in eye),
            top_left_corner=tuple(float(x) for x in top_left),
            horizontal=tuple(float(x) for x in horizontal),
            vertical=tuple(float(x) for x in vertical),
        )


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_top_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_camera(camera: Camera) -> None:
    """Load the camera geometry into the fields read by get_ray().

    Must be called from Python before rendering; the camera stays fixed for
    the duration of a render.

    Args:
        camera: The camera to render through.
    """
    _camera_origin[None] = list(camera.origin)
    _top_left_corner[None] = list(camera.top_left_corner)
    _viewport_horizontal[None] = list(camera.horizontal)
    _viewport_vertical[None] = list(camera.vertical)


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_ray(u: ti.f32, v: ti.f32) -> Ray:
    """Generate a ray through normalized image coordinates (u, v).

    - u = 0: left edge, u = 1: right edge
    - v = 0: top edge, v = 1: bottom edge

    Args:
        u: Horizontal coordinate in [0, 1].
        v: Vertical coordinate in [0, 1].

    Returns:
        A Ray from the camera origin with direction
        top_left_corner + u * horizontal + v * vertical (normalized).
    """
    direction = (
        _top_left_corner[None] + u * _viewport_horizontal[None] + v * _viewport_vertical[None]
    )
    return make_ray(_camera_origin[None], direction)


@ti.func
def get_ray_jittered(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate a ray through a random point inside pixel (i, j).

    Uses ``u = (i + rand) / width`` and ``v = (j + rand) / height`` with
    rand uniform in [0, 1). Averaging many such rays anti-aliases edges.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray through a jittered point of the pixel.
    """
    u = (ti.cast(pixel_i, ti.f32) + ti.random(ti.f32)) / ti.cast(width, ti.f32)
    v = (ti.cast(pixel_j, ti.f32) + ti.random(ti.f32)) / ti.cast(height, ti.f32)
    return get_ray(u, v)


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the current camera state for debugging.

    Returns:
        Dictionary with origin, top_left_corner, horizontal and vertical.
    """
    fields = {
        "origin": _camera_origin,
        "top_left_corner": _top_left_corner,
        "horizontal": _viewport_horizontal,
        "vertical": _viewport_vertical,
    }
    info = {}
    for name, vec_field in fields.items():
        value = vec_field[None]
        info[name] = (float(value[0]), float(value[1]), float(value[2]))
    return info
