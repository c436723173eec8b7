"""Unit tests for rays and vector helpers.

Tests cover:
- Ray construction normalizes the direction
- Point evaluation along a ray
- lerp, reflect and refract
- Random points inside the unit sphere
"""

import math

import taichi as ti


class TestRay:
    """Tests for Ray construction and evaluation."""

    def test_make_ray_normalizes_direction(self):
        """Test that make_ray stores a unit-length direction."""
        from raycaster.core.ray import make_ray, vec3

        origin = ti.Vector.field(3, dtype=ti.f32, shape=())
        direction = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(3.0, 0.0, 4.0))
            origin[None] = ray.origin
            direction[None] = ray.direction

        test_kernel()
        o = origin[None]
        d = direction[None]
        assert abs(o[0] - 1.0) < 1e-6
        assert abs(o[1] - 2.0) < 1e-6
        assert abs(o[2] - 3.0) < 1e-6
        assert abs(d[0] - 0.6) < 1e-6
        assert abs(d[1]) < 1e-6
        assert abs(d[2] - 0.8) < 1e-6

    def test_ray_at(self):
        """Test point evaluation origin + t * direction."""
        from raycaster.core.ray import make_ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, -2.0))
            result[None] = ray_at(ray, 2.5)

        test_kernel()
        p = result[None]
        assert abs(p[0]) < 1e-6
        assert abs(p[1] - 1.0) < 1e-6
        assert abs(p[2] + 2.5) < 1e-6


class TestVectorHelpers:
    """Tests for the vector helper functions."""

    def test_lerp_endpoints_and_midpoint(self):
        """Test that lerp returns a at t=0, b at t=1 and the mean at t=0.5."""
        from raycaster.core.ray import lerp, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=3)

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, 1.0, 1.0)
            b = vec3(0.5, 0.7, 1.0)
            result[0] = lerp(a, b, 0.0)
            result[1] = lerp(a, b, 1.0)
            result[2] = lerp(a, b, 0.5)

        test_kernel()
        assert all(abs(result[0][k] - 1.0) < 1e-6 for k in range(3))
        assert all(abs(result[1][k] - e) < 1e-6 for k, e in enumerate((0.5, 0.7, 1.0)))
        assert all(abs(result[2][k] - e) < 1e-6 for k, e in enumerate((0.75, 0.85, 1.0)))

    def test_length_squared_and_dot(self):
        """Test dot product and squared length."""
        from raycaster.core.ray import dot, length_squared, vec3

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            result[0] = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0))
            result[1] = length_squared(vec3(1.0, 2.0, 2.0))

        test_kernel()
        assert abs(result[0] - 12.0) < 1e-5
        assert abs(result[1] - 9.0) < 1e-5

    def test_near_zero(self):
        """Test near_zero on a tiny and a regular vector."""
        from raycaster.core.ray import near_zero, vec3

        result = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            result[0] = near_zero(vec3(1e-9, -1e-9, 0.0))
            result[1] = near_zero(vec3(0.0, 1e-3, 0.0))

        test_kernel()
        assert result[0] == 1
        assert result[1] == 0

    def test_reflect(self):
        """Test reflection about a normal: d - 2(d.n)n."""
        from raycaster.core.ray import normalize, reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            incident = normalize(vec3(1.0, -1.0, 0.0))
            result[None] = reflect(incident, vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        s = 1.0 / math.sqrt(2.0)
        assert abs(r[0] - s) < 1e-5
        assert abs(r[1] - s) < 1e-5
        assert abs(r[2]) < 1e-5

    def test_refract_normal_incidence_passes_straight(self):
        """Test that a ray along the normal is not bent."""
        from raycaster.core.ray import refract, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = refract(vec3(0.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0), 1.0 / 1.5)

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-5
        assert abs(r[1] + 1.0) < 1e-5
        assert abs(r[2]) < 1e-5

    def test_refract_follows_snell(self):
        """Test that the refracted direction satisfies sin_t = ratio * sin_i."""
        from raycaster.core.ray import normalize, refract, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            incident = normalize(vec3(1.0, -1.0, 0.0))
            result[None] = refract(incident, vec3(0.0, 1.0, 0.0), 1.0 / 1.5)

        test_kernel()
        r = result[None]
        sin_i = 1.0 / math.sqrt(2.0)
        assert abs(r[0] - sin_i / 1.5) < 1e-5
        assert r[1] < 0.0
        assert abs(r[0] ** 2 + r[1] ** 2 + r[2] ** 2 - 1.0) < 1e-4

    def test_refract_total_internal_reflection_returns_zero(self):
        """Test that a non-positive discriminant yields the zero vector."""
        from raycaster.core.ray import normalize, refract, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            # Grazing exit from glass into air
            incident = normalize(vec3(1.0, -0.2, 0.0))
            result[None] = refract(incident, vec3(0.0, 1.0, 0.0), 1.5)

        test_kernel()
        r = result[None]
        assert r[0] == 0.0
        assert r[1] == 0.0
        assert r[2] == 0.0


class TestRandomInUnitSphere:
    """Tests for rejection sampling inside the unit sphere."""

    def test_samples_inside_unit_sphere(self):
        """Test that every sample has squared length below 1."""
        from raycaster.core.ray import random_in_unit_sphere

        n = 2000
        samples = ti.Vector.field(3, dtype=ti.f32, shape=n)

        @ti.kernel
        def test_kernel():
            for i in range(n):
                samples[i] = random_in_unit_sphere()

        test_kernel()
        pts = samples.to_numpy()
        assert ((pts**2).sum(axis=1) < 1.0).all()

    def test_samples_are_spread_out(self):
        """Test that samples are not degenerate and roughly centered."""
        from raycaster.core.ray import random_in_unit_sphere

        n = 5000
        samples = ti.Vector.field(3, dtype=ti.f32, shape=n)

        @ti.kernel
        def test_kernel():
            for i in range(n):
                samples[i] = random_in_unit_sphere()

        test_kernel()
        pts = samples.to_numpy()
        # Mean of a uniform ball is the origin
        assert abs(pts.mean(axis=0)).max() < 0.05
        # Distinct draws
        assert len({tuple(p) for p in pts[:100]}) == 100
