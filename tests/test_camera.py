"""Tests for the fixed virtual-screen camera.

Tests cover:
- Default screen geometry and corner rays
- Jittered rays stay inside their pixel
- Look-at construction and its validation
- Camera state inspection
"""

import math

import pytest
import taichi as ti


def _corner_directions(points):
    """Directions of get_ray at the given (u, v) points."""
    from raycaster.camera.fixed import get_ray

    n = len(points)
    uv = ti.Vector.field(2, dtype=ti.f32, shape=n)
    origins = ti.Vector.field(3, dtype=ti.f32, shape=n)
    directions = ti.Vector.field(3, dtype=ti.f32, shape=n)
    for k, p in enumerate(points):
        uv[k] = p

    @ti.kernel
    def test_kernel():
        for k in range(n):
            ray = get_ray(uv[k][0], uv[k][1])
            origins[k] = ray.origin
            directions[k] = ray.direction

    test_kernel()
    return origins.to_numpy(), directions.to_numpy()


def _unit(v):
    length = math.sqrt(sum(c * c for c in v))
    return tuple(c / length for c in v)


class TestDefaultCamera:
    """Tests for the default 4 x 2 screen at z = -1."""

    def test_default_values(self):
        """Test the default screen vectors."""
        from raycaster.camera.fixed import Camera

        camera = Camera()
        assert camera.origin == (0.0, 0.0, 0.0)
        assert camera.top_left_corner == (-2.0, 1.0, -1.0)
        assert camera.horizontal == (4.0, 0.0, 0.0)
        assert camera.vertical == (0.0, -2.0, 0.0)

    def test_corner_rays(self):
        """Test rays through the four corners and the center."""
        from raycaster.camera.fixed import Camera, setup_camera

        setup_camera(Camera())
        points = [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0), (0.5, 0.5)]
        expected = [(-2, 1, -1), (2, 1, -1), (-2, -1, -1), (2, -1, -1), (0, 0, -1)]

        origins, directions = _corner_directions(points)

        assert abs(origins).max() < 1e-6
        for d, e in zip(directions, expected):
            unit = _unit(e)
            assert all(abs(d[k] - unit[k]) < 1e-5 for k in range(3))

    def test_translated_origin(self):
        """Test that the screen is relative to the camera origin."""
        from raycaster.camera.fixed import Camera, setup_camera

        setup_camera(Camera(origin=(1.0, 2.0, 3.0)))
        origins, directions = _corner_directions([(0.0, 0.0)])

        assert all(abs(origins[0][k] - e) < 1e-6 for k, e in enumerate((1.0, 2.0, 3.0)))
        unit = _unit((-2, 1, -1))
        assert all(abs(directions[0][k] - unit[k]) < 1e-5 for k in range(3))

    def test_jittered_rays_stay_in_pixel(self):
        """Test that jittered rays pass through their own pixel footprint."""
        from raycaster.camera.fixed import Camera, get_ray_jittered, setup_camera

        setup_camera(Camera())
        n = 500
        width, height = 8, 4
        hits = ti.Vector.field(2, dtype=ti.f32, shape=n)

        @ti.kernel
        def test_kernel():
            for k in range(n):
                ray = get_ray_jittered(3, 1, width, height)
                # Intersect with the screen plane z = -1
                p = ray.origin + ray.direction * (-1.0 / ray.direction.z)
                hits[k] = ti.Vector([p.x, p.y])

        test_kernel()
        pts = hits.to_numpy()
        # Pixel 3 of 8 spans x in [-0.5, 0.0]; row 1 of 4 spans y in [0.0, 0.5]
        assert pts[:, 0].min() >= -0.5 - 1e-4
        assert pts[:, 0].max() <= 0.0 + 1e-4
        assert pts[:, 1].min() >= 0.0 - 1e-4
        assert pts[:, 1].max() <= 0.5 + 1e-4
        assert pts[:, 0].std() > 0.05

    def test_get_camera_info(self):
        """Test that get_camera_info reflects the loaded camera."""
        from raycaster.camera.fixed import Camera, get_camera_info, setup_camera

        setup_camera(Camera())
        info = get_camera_info()
        assert info["top_left_corner"] == pytest.approx((-2.0, 1.0, -1.0))
        assert info["horizontal"] == pytest.approx((4.0, 0.0, 0.0))
        assert info["vertical"] == pytest.approx((0.0, -2.0, 0.0))


class TestLookAt:
    """Tests for Camera.from_look_at."""

    def test_reproduces_default_camera(self):
        """Test that the default view parameters give the default screen."""
        from raycaster.camera.fixed import Camera

        camera = Camera.from_look_at((0, 0, 0), (0, 0, -1), vfov=90.0, aspect_ratio=2.0)
        default = Camera()

        assert camera.origin == pytest.approx(default.origin)
        assert camera.top_left_corner == pytest.approx(default.top_left_corner)
        assert camera.horizontal == pytest.approx(default.horizontal)
        assert camera.vertical == pytest.approx(default.vertical)

    def test_center_ray_points_at_target(self):
        """Test that the screen center lies on the view direction."""
        from raycaster.camera.fixed import Camera

        camera = Camera.from_look_at((3, 2, 1), (0, 0, -1), vfov=40.0, aspect_ratio=1.5)
        center = [
            camera.top_left_corner[k] + 0.5 * camera.horizontal[k] + 0.5 * camera.vertical[k]
            for k in range(3)
        ]
        expected = _unit((-3.0, -2.0, -2.0))
        assert _unit(center) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"lookfrom": (0, 0, 0), "lookat": (0, 0, -1), "vfov": 0.0},
            {"lookfrom": (0, 0, 0), "lookat": (0, 0, -1), "vfov": 180.0},
            {"lookfrom": (0, 0, 0), "lookat": (0, 0, -1), "aspect_ratio": 0.0},
            {"lookfrom": (1, 1, 1), "lookat": (1, 1, 1)},
            {"lookfrom": (0, 0, 0), "lookat": (0, 1, 0), "vup": (0, 1, 0)},
        ],
    )
    def test_invalid_parameters(self, kwargs):
        """Test that degenerate views raise ValueError."""
        from raycaster.camera.fixed import Camera

        with pytest.raises(ValueError):
            Camera.from_look_at(**kwargs)
