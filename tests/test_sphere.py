"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside
- Ray missing sphere
- Ray starting inside sphere (far wall)
- Sphere entirely behind the ray
- Tangent rays
- Unit-direction precondition
"""

import pytest
import taichi as ti


def _hit(origin, direction, center, radius):
    """Run hit_sphere in a kernel and return (hit, t)."""
    from src.tinytracer.geometry.sphere import Sphere, hit_sphere, vec3

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32,
        oy: ti.f32,
        oz: ti.f32,
        dx: ti.f32,
        dy: ti.f32,
        dz: ti.f32,
        cx: ti.f32,
        cy: ti.f32,
        cz: ti.f32,
        r: ti.f32,
    ):
        sphere = Sphere(center=vec3(cx, cy, cz), radius=r)
        did_hit, t = hit_sphere(vec3(ox, oy, oz), vec3(dx, dy, dz), sphere)
        hit[None] = did_hit
        t_val[None] = t

    test_kernel(*origin, *direction, *center, radius)
    return hit[None], t_val[None]


class TestSphereBasics:
    """Tests for Sphere dataclass and basic operations."""

    def test_make_sphere(self):
        """Test make_sphere convenience function."""
        from src.tinytracer.geometry.sphere import make_sphere, vec3

        center_result = ti.field(dtype=ti.math.vec3, shape=())
        radius_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(1.0, 2.0, 3.0), 0.5)
            center_result[None] = sphere.center
            radius_result[None] = sphere.radius

        test_kernel()
        c = center_result[None]
        assert abs(c[0] - 1.0) < 1e-6
        assert abs(c[1] - 2.0) < 1e-6
        assert abs(c[2] - 3.0) < 1e-6
        assert abs(radius_result[None] - 0.5) < 1e-6

    def test_sphere_normal(self):
        """Test that the normal points from the center through the point."""
        from src.tinytracer.geometry.sphere import Sphere, sphere_normal, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            sphere = Sphere(center=vec3(0.0, 0.0, 600.0), radius=200.0)
            result[None] = sphere_normal(sphere, vec3(0.0, 0.0, 400.0))

        test_kernel()
        n = result[None]
        assert abs(n[0]) < 1e-6
        assert abs(n[1]) < 1e-6
        assert abs(n[2] + 1.0) < 1e-6


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    @pytest.mark.parametrize("radius", [1.0, 10.0, 200.0])
    def test_hit_at_radius_distance(self, radius):
        """A ray from (0, 0, -2R) toward a sphere of radius R at the origin hits at t = R."""
        hit, t = _hit((0.0, 0.0, -2.0 * radius), (0.0, 0.0, 1.0), (0.0, 0.0, 0.0), radius)
        assert hit == 1
        assert abs(t - radius) < 1e-3

    def test_hit_default_scene_sphere(self):
        """Test the camera ray hitting the red sphere at z = 400."""
        hit, t = _hit((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, 600.0), 200.0)
        assert hit == 1
        assert abs(t - 400.0) < 1e-2

    def test_miss(self):
        """Test ray passing beside the sphere."""
        hit, _ = _hit((0.0, 300.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, 600.0), 200.0)
        assert hit == 0

    def test_inside_hits_far_wall(self):
        """Test that a ray starting at the center hits the far wall."""
        hit, t = _hit((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 0.0), 5.0)
        assert hit == 1
        assert abs(t - 5.0) < 1e-4

    def test_sphere_behind_ray_is_miss(self):
        """Test that both roots negative means no hit."""
        hit, _ = _hit((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, -10.0), 2.0)
        assert hit == 0

    def test_tangent_ray(self):
        """Test a ray grazing the sphere."""
        hit, t = _hit((1.0, 0.0, -2.0), (0.0, 0.0, 1.0), (0.0, 0.0, 0.0), 1.0)
        assert hit == 1
        assert abs(t - 2.0) < 1e-2

    def test_non_unit_direction_asserts(self):
        """Test that a non-unit direction trips the debug assertion."""
        with pytest.raises(AssertionError):
            _hit((0.0, 0.0, -2.0), (0.0, 0.0, 2.0), (0.0, 0.0, 0.0), 1.0)
