"""Unit tests for the Dielectric material module.

Tests cover:
- Fixed (1, 1, 0) attenuation
- Refraction entering and leaving the surface
- Total internal reflection
- Material registry operations and IOR validation
"""

import math

import pytest
import taichi as ti


def _scatter(ior, incident, normal):
    from raycaster.materials.dielectric import scatter_dielectric, vec3, will_reflect

    result_dir = ti.Vector.field(3, dtype=ti.f32, shape=())
    result_att = ti.Vector.field(3, dtype=ti.f32, shape=())
    result_scatter = ti.field(dtype=ti.i32, shape=())
    result_tir = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(eta: ti.f32, d: vec3, n: vec3):
        unit = d.normalized()
        direction, attenuation, did_scatter = scatter_dielectric(eta, unit, n)
        result_dir[None] = direction
        result_att[None] = attenuation
        result_scatter[None] = did_scatter
        result_tir[None] = will_reflect(eta, unit, n)

    test_kernel(ior, vec3(*incident), vec3(*normal))
    return result_dir[None], result_att[None], result_scatter[None], result_tir[None]


class TestScatterDielectric:
    """Tests for scatter_dielectric."""

    def test_attenuation_is_fixed_yellow(self):
        """Test that attenuation is (1, 1, 0) and the ray always scatters."""
        _, att, scattered, _ = _scatter(1.5, (0, -1, 0), (0, 1, 0))

        assert scattered == 1
        assert abs(att[0] - 1.0) < 1e-6
        assert abs(att[1] - 1.0) < 1e-6
        assert abs(att[2]) < 1e-6

    def test_normal_incidence_passes_straight(self):
        """Test that a ray along the normal continues undeviated."""
        d, _, _, tir = _scatter(1.5, (0, -1, 0), (0, 1, 0))

        assert tir == 0
        assert abs(d[0]) < 1e-5
        assert abs(d[1] + 1.0) < 1e-5
        assert abs(d[2]) < 1e-5

    def test_entering_bends_toward_normal(self):
        """Test sin_t = sin_i / ior when entering the material."""
        d, _, _, tir = _scatter(1.5, (1, -1, 0), (0, 1, 0))

        assert tir == 0
        sin_i = 1.0 / math.sqrt(2.0)
        assert abs(d[0] - sin_i / 1.5) < 1e-5
        assert d[1] < 0.0

    def test_exiting_uses_flipped_normal(self):
        """Test sin_t = ior * sin_i when leaving the material."""
        # Ray inside the glass travelling outward through the top surface
        d, _, _, tir = _scatter(1.5, (0.3, 1.0, 0.0), (0, 1, 0))

        assert tir == 0
        length = math.sqrt(0.3**2 + 1.0)
        sin_i = 0.3 / length
        assert abs(d[0] - 1.5 * sin_i) < 1e-5
        # Still leaving through the surface
        assert d[1] > 0.0

    def test_total_internal_reflection(self):
        """Test that a grazing exit is reflected back inside."""
        d, att, scattered, tir = _scatter(1.5, (1.0, 0.2, 0.0), (0, 1, 0))

        assert tir == 1
        assert scattered == 1
        length = math.sqrt(1.0 + 0.04)
        assert abs(d[0] - 1.0 / length) < 1e-5
        assert abs(d[1] + 0.2 / length) < 1e-5
        assert abs(att[2]) < 1e-6

    def test_scatter_by_id_uses_registered_ior(self):
        """Test scatter_dielectric_by_id reads the registry."""
        from raycaster.materials.dielectric import (
            add_dielectric_material,
            get_dielectric_ior,
            scatter_dielectric_by_id,
            vec3,
        )

        add_dielectric_material(1.3)
        idx = add_dielectric_material(2.0)

        ior = ti.field(dtype=ti.f32, shape=())
        direction = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(material_idx: ti.i32):
            ior[None] = get_dielectric_ior(material_idx)
            incident = vec3(1.0, -1.0, 0.0).normalized()
            d, _, _ = scatter_dielectric_by_id(material_idx, incident, vec3(0.0, 1.0, 0.0))
            direction[None] = d

        test_kernel(idx)
        assert abs(ior[None] - 2.0) < 1e-6
        assert abs(direction[None][0] - (1.0 / math.sqrt(2.0)) / 2.0) < 1e-5


class TestDielectricRegistry:
    """Tests for the dielectric material registry."""

    def test_add_and_count(self):
        """Test sequential indices and count."""
        from raycaster.materials.dielectric import (
            add_dielectric_material,
            get_dielectric_material_count,
        )

        assert add_dielectric_material() == 0
        assert add_dielectric_material(2.4) == 1
        assert get_dielectric_material_count() == 2

    @pytest.mark.parametrize("ior", [1.0, 0.5, -1.5])
    def test_ior_must_exceed_one(self, ior):
        """Test that an IOR of 1 or less is rejected."""
        from raycaster.materials.dielectric import add_dielectric_material

        with pytest.raises(ValueError, match="greater than 1.0"):
            add_dielectric_material(ior)
