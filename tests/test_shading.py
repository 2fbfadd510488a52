"""Tests for local Phong shading and hard shadows.

The reference setup is the red sphere of the demo scene: radius 200 at
(0, 0, 600), lit from (0, 500, 300). The camera ray along +z hits it at
(0, 0, 400) where the normal is (0, 0, -1), so the diffuse cosine is
100 / |(0, 500, -100)| ~= 0.19612.
"""

import math

import taichi as ti

DIFFUSE_COS = 100.0 / math.sqrt(500.0**2 + 100.0**2)


def _load(spheres, lights):
    from src.tinytracer.scene.manager import SceneManager
    from src.tinytracer.scene.model import Scene

    SceneManager().load(Scene(spheres=spheres, lights=lights, background="black"))


def _shade_front_point(material_id=0):
    """Shade the front pole (0, 0, 400) of the reference sphere viewed along +z."""
    from src.tinytracer.core.shading import shade_local
    from src.tinytracer.materials.phong import get_phong_material
    from src.tinytracer.scene.intersection import vec3

    result = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(mid: ti.i32):
        material = get_phong_material(mid)
        result[None] = shade_local(
            vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, 400.0), vec3(0.0, 0.0, -1.0), material
        )

    test_kernel(material_id)
    c = result[None]
    return float(c[0]), float(c[1]), float(c[2])


def _occluded(light_position):
    from src.tinytracer.core.shading import is_light_occluded
    from src.tinytracer.scene.intersection import vec3

    result = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(lx: ti.f32, ly: ti.f32, lz: ti.f32):
        result[None] = is_light_occluded(
            vec3(0.0, 0.0, 400.0), vec3(0.0, 0.0, -1.0), vec3(lx, ly, lz)
        )

    test_kernel(*light_position)
    return result[None]


class TestDiffuse:
    """Tests for the Lambert diffuse term."""

    def test_diffuse_value(self):
        from src.tinytracer.scene.model import Material, PointLight, SceneSphere

        _load(
            (SceneSphere((0.0, 0.0, 600.0), 200.0, Material(diffuse_color="red")),),
            (PointLight((0.0, 500.0, 300.0), 1.0),),
        )
        r, g, b = _shade_front_point()
        assert abs(r - DIFFUSE_COS) < 1e-4
        assert g == 0.0
        assert b == 0.0

    def test_diffuse_scales_with_intensity_and_kd(self):
        from src.tinytracer.scene.model import Material, PointLight, SceneSphere

        _load(
            (SceneSphere((0.0, 0.0, 600.0), 200.0, Material(diffuse_color="white", kd=0.5)),),
            (PointLight((0.0, 500.0, 300.0), 2.0),),
        )
        r, g, b = _shade_front_point()
        for channel in (r, g, b):
            assert abs(channel - DIFFUSE_COS) < 1e-4

    def test_lights_sum(self):
        from src.tinytracer.scene.model import Material, PointLight, SceneSphere

        _load(
            (SceneSphere((0.0, 0.0, 600.0), 200.0, Material(diffuse_color="red")),),
            (PointLight((0.0, 500.0, 300.0), 1.0), PointLight((0.0, -500.0, 300.0), 1.0)),
        )
        r, _, _ = _shade_front_point()
        assert abs(r - 2.0 * DIFFUSE_COS) < 1e-4

    def test_light_behind_surface_contributes_nothing(self):
        from src.tinytracer.scene.model import Material, PointLight, SceneSphere

        _load(
            (SceneSphere((0.0, 0.0, 600.0), 200.0, Material(diffuse_color="red")),),
            (PointLight((0.0, 0.0, 1200.0), 1.0),),
        )
        assert _shade_front_point() == (0.0, 0.0, 0.0)


class TestSpecular:
    """Tests for the Phong specular term."""

    def test_mirror_aligned_highlight(self):
        """A light at the eye position gives a full-strength highlight."""
        from src.tinytracer.scene.model import Material, PointLight, SceneSphere

        material = Material(kd=0.0, ks=1.0, specular_color=(0.5, 0.25, 1.0), specular_exponent=10.0)
        _load(
            (SceneSphere((0.0, 0.0, 600.0), 200.0, material),),
            (PointLight((0.0, 0.0, 0.0), 1.0),),
        )
        r, g, b = _shade_front_point()
        assert abs(r - 0.5) < 1e-4
        assert abs(g - 0.25) < 1e-4
        assert abs(b - 1.0) < 1e-4

    def test_off_axis_highlight_falls_off_with_exponent(self):
        from src.tinytracer.scene.model import Material, PointLight, SceneSphere

        # reflect(L, n) only flips the z component, so its dot with +z is the diffuse cosine
        expected = DIFFUSE_COS**3

        material = Material(kd=0.0, ks=1.0, specular_color="white", specular_exponent=3.0)
        _load(
            (SceneSphere((0.0, 0.0, 600.0), 200.0, material),),
            (PointLight((0.0, 500.0, 300.0), 1.0),),
        )
        r, _, _ = _shade_front_point()
        assert abs(r - expected) < 1e-4


class TestShadows:
    """Tests for shadow-ray occlusion."""

    def test_unoccluded(self):
        from src.tinytracer.scene.model import PointLight, SceneSphere

        _load((SceneSphere((0.0, 0.0, 600.0), 200.0),), (PointLight((0.0, 500.0, 300.0)),))
        assert _occluded((0.0, 500.0, 300.0)) == 0

    def test_sphere_between_point_and_light(self):
        from src.tinytracer.scene.model import Material, PointLight, SceneSphere

        spheres = (
            SceneSphere((0.0, 0.0, 600.0), 200.0, Material(diffuse_color="red")),
            SceneSphere((0.0, 250.0, 350.0), 20.0),
        )
        _load(spheres, (PointLight((0.0, 500.0, 300.0)),))
        assert _occluded((0.0, 500.0, 300.0)) == 1
        assert _shade_front_point() == (0.0, 0.0, 0.0)

    def test_sphere_beyond_light_does_not_occlude(self):
        from src.tinytracer.scene.model import PointLight, SceneSphere

        spheres = (
            SceneSphere((0.0, 0.0, 600.0), 200.0),
            SceneSphere((0.0, 1000.0, 200.0), 50.0),
        )
        _load(spheres, (PointLight((0.0, 500.0, 300.0)),))
        assert _occluded((0.0, 500.0, 300.0)) == 0
