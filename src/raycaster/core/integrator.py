"""Path tracing integrator for Monte Carlo light estimation.

This module implements the color estimator and the render kernels. The
estimator follows a ray through the scene, bouncing off surfaces according to
their materials, and multiplies together the attenuation of every bounce.
The only light in the scene is the sky gradient seen by rays that escape.

A path ends in one of three ways:
    - the ray misses everything: the sky color, weighted by the bounces so far
    - the ray hits a surface with the bounce budget spent: black
    - the surface absorbs the ray: black

The recursion ``color(ray) = attenuation * color(scattered)`` is evaluated as
a loop carrying the attenuation product, so stack depth never depends on the
bounce budget.

Each pixel is rendered completely (every sample, every bounce) by a single
Taichi thread. Pixels share only read-only scene data, and Taichi gives every
thread its own random stream.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.core.integrator import setup_render_target, render_image
    >>> from raycaster.scene.default_scene import create_default_scene
    >>> from raycaster.camera.fixed import setup_camera
    >>>
    >>> scene, camera = create_default_scene()
    >>> setup_camera(camera)
    >>> setup_render_target(200, 100)
    >>> render_image(num_samples=100)
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raycaster.camera.fixed import get_ray_jittered
from raycaster.config import (
    DEFAULT_SAMPLES,
    MAX_DEPTH,
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    T_MIN,
)
from raycaster.core.ray import Ray, lerp, make_ray, normalize
from raycaster.materials.dielectric import scatter_dielectric_by_id
from raycaster.materials.lambertian import scatter_lambertian_by_id
from raycaster.materials.metal import scatter_metal_by_id
from raycaster.scene.manager import (
    MaterialType,
    get_material_type,
    get_material_type_index,
)
from raycaster.scene.world import intersect_world

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Upper bound of the intersection interval
T_MAX = math.inf

# Sky gradient endpoints
SKY_WHITE = vec3(1.0, 1.0, 1.0)
SKY_BLUE = vec3(0.5, 0.7, 1.0)

# =============================================================================
# Render Target (RGBA Image Buffer)
# =============================================================================

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# RGBA pixels indexed [row, column], row 0 at the top
_pixels = ti.Vector.field(4, dtype=ti.u8, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target for an image of the given size.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


@ti.kernel
def _zero_pixels():
    """Write transparent black to every pixel of the render target."""
    for j, i in _pixels:
        _pixels[j, i] = ti.Vector([0, 0, 0, 0], dt=ti.u8)


def clear_render_target() -> None:
    """Reset every pixel to transparent black."""
    _zero_pixels()


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def get_pixels_numpy() -> npt.NDArray[np.uint8]:
    """Get the rendered image as an RGBA NumPy array.

    Returns:
        Array of shape (height, width, 4) with dtype uint8, row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    return _pixels.to_numpy()[:height, :width, :].astype(np.uint8)


# =============================================================================
# Material Dispatch
# =============================================================================


@ti.func
def _scatter_material(material_id: ti.i32, incident_direction: vec3, normal: vec3):
    """Dispatch to the scatter function of the hit material.

    Args:
        material_id: The unified material ID.
        incident_direction: The incoming ray direction (unit length).
        normal: The outward surface normal at the hit point.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter). Unknown
        material IDs absorb the ray.
    """
    mat_type = get_material_type(material_id)
    type_index = get_material_type_index(material_id)

    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0

    if mat_type == int(MaterialType.LAMBERTIAN):
        scattered_direction, attenuation, did_scatter = scatter_lambertian_by_id(
            type_index, normal
        )
    elif mat_type == int(MaterialType.METAL):
        scattered_direction, attenuation, did_scatter = scatter_metal_by_id(
            type_index, incident_direction, normal
        )
    elif mat_type == int(MaterialType.DIELECTRIC):
        scattered_direction, attenuation, did_scatter = scatter_dielectric_by_id(
            type_index, incident_direction, normal
        )

    return scattered_direction, attenuation, did_scatter


# =============================================================================
# Color Estimation
# =============================================================================


@ti.func
def background(ray: Ray) -> vec3:
    """Sky color seen along an escaping ray.

    Interpolates between white (straight up) and sky blue (straight down) on
    the vertical component of the unit direction, mapped from [-1, 1] to
    [0, 1]. The gradient is keyed on ``1 - y`` rather than ``y + 1`` on
    purpose: a ray pointing straight up must see pure white.
    """
    unit_direction = normalize(ray.direction)
    t = 0.5 * (1.0 - unit_direction.y)
    return lerp(SKY_WHITE, SKY_BLUE, t)


@ti.func
def trace_path(ray: Ray, max_depth: ti.i32, t_min: ti.f32) -> vec3:
    """Estimate the light arriving along a ray.

    Args:
        ray: The ray to follow (unit-length direction).
        max_depth: Number of scatter events allowed; a path that hits a
            surface after spending them returns black.
        t_min: Lower bound of the intersection interval.

    Returns:
        The estimated color (linear RGB).
    """
    current = Ray(origin=ray.origin, direction=ray.direction)
    throughput = vec3(1.0, 1.0, 1.0)
    color = vec3(0.0, 0.0, 0.0)

    # Active flag for path continuation
    active = 1

    for depth in range(max_depth + 1):
        if active == 1:
            hit_record = intersect_world(current, t_min, T_MAX)

            if hit_record.hit == 0:
                color = throughput * background(current)
                active = 0
            elif depth >= max_depth:
                # Bounce budget exhausted
                active = 0
            else:
                scattered_direction, attenuation, did_scatter = _scatter_material(
                    hit_record.material_id, current.direction, hit_record.normal
                )
                if did_scatter == 0:
                    active = 0
                else:
                    throughput *= attenuation
                    current = make_ray(hit_record.point, scattered_direction)

    return color


@ti.func
def encode_pixel(color: vec3) -> tm.ivec4:
    """Convert a linear color to an opaque 8-bit RGBA value.

    Applies gamma 2 (square root per channel), clamps to [0, 1] so bright
    values saturate at 255 instead of wrapping, then scales and rounds.
    NaN channels encode as 0.

    Args:
        color: Linear RGB color, nominally in [0, 1].

    Returns:
        Integer (R, G, B, 255) with channels in [0, 255].
    """
    linear = tm.max(color, 0.0)
    for c in ti.static(range(3)):
        if tm.isnan(linear[c]):
            linear[c] = 0.0
    corrected = tm.clamp(tm.sqrt(linear), 0.0, 1.0)
    scaled = ti.cast(corrected * 255.0 + 0.5, ti.i32)
    return tm.ivec4(scaled.x, scaled.y, scaled.z, 255)


@ti.func
def sample_pixel(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    num_samples: ti.i32,
    max_depth: ti.i32,
    t_min: ti.f32,
) -> vec3:
    """Average num_samples jittered color estimates for one pixel."""
    total = vec3(0.0, 0.0, 0.0)
    for _ in range(num_samples):
        ray = get_ray_jittered(pixel_i, pixel_j, width, height)
        total += trace_path(ray, max_depth, t_min)
    return total / ti.cast(num_samples, ti.f32)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows(
    row_start: ti.i32,
    row_end: ti.i32,
    width: ti.i32,
    height: ti.i32,
    num_samples: ti.i32,
    max_depth: ti.i32,
    t_min: ti.f32,
):
    """Render complete pixels for rows [row_start, row_end), in parallel."""
    for j, i in ti.ndrange((row_start, row_end), (0, width)):
        color = sample_pixel(i, j, width, height, num_samples, max_depth, t_min)
        _pixels[j, i] = ti.cast(encode_pixel(color), ti.u8)


@ti.kernel
def _trace_single_ray(origin: vec3, direction: vec3, max_depth: ti.i32, t_min: ti.f32) -> vec3:
    """Estimate the color along one ray from Python."""
    return trace_path(make_ray(origin, direction), max_depth, t_min)


@ti.kernel
def _render_single_pixel(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    num_samples: ti.i32,
    max_depth: ti.i32,
    t_min: ti.f32,
) -> tm.ivec4:
    """Render one pixel without touching the render target."""
    return encode_pixel(
        sample_pixel(pixel_i, pixel_j, width, height, num_samples, max_depth, t_min)
    )


# =============================================================================
# Public Rendering API
# =============================================================================


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    max_depth: int = MAX_DEPTH,
    t_min: float = T_MIN,
) -> tuple[float, float, float]:
    """Estimate the color along a single ray against the current world.

    Args:
        origin: Ray origin.
        direction: Ray direction (any non-zero length; it is normalized).
        max_depth: Number of scatter events allowed.
        t_min: Lower bound of the intersection interval.

    Returns:
        Tuple of (R, G, B) linear color values.
    """
    color = _trace_single_ray(vec3(*origin), vec3(*direction), max_depth, t_min)
    return (float(color[0]), float(color[1]), float(color[2]))


def render_pixel(
    pixel_i: int,
    pixel_j: int,
    num_samples: int = DEFAULT_SAMPLES,
    max_depth: int = MAX_DEPTH,
    t_min: float = T_MIN,
) -> tuple[int, int, int, int]:
    """Render a single pixel of the current render target size.

    The result is returned, not stored in the render target.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        num_samples: Number of jittered samples to average.
        max_depth: Number of scatter events allowed per sample.
        t_min: Lower bound of the intersection interval.

    Returns:
        Tuple of (R, G, B, A) byte values.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    rgba = _render_single_pixel(pixel_i, pixel_j, width, height, num_samples, max_depth, t_min)
    return (int(rgba[0]), int(rgba[1]), int(rgba[2]), int(rgba[3]))


def render_rows(
    row_start: int,
    row_end: int,
    num_samples: int = DEFAULT_SAMPLES,
    max_depth: int = MAX_DEPTH,
    t_min: float = T_MIN,
) -> None:
    """Render the rows [row_start, row_end) into the render target.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the row range is outside the image or num_samples < 1.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if not 0 <= row_start <= row_end <= height:
        raise ValueError(f"Invalid row range [{row_start}, {row_end}) for height {height}")
    if num_samples < 1:
        raise ValueError(f"num_samples must be at least 1, got {num_samples}")

    if row_start < row_end:
        _render_rows(row_start, row_end, width, height, num_samples, max_depth, t_min)


def render_image(
    num_samples: int = DEFAULT_SAMPLES,
    max_depth: int = MAX_DEPTH,
    t_min: float = T_MIN,
) -> None:
    """Render every pixel of the render target.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    _, height = get_image_dimensions()
    render_rows(0, height, num_samples, max_depth, t_min)
