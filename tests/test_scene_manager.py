"""Tests for uploading scene snapshots with SceneManager."""

import pytest


@pytest.fixture
def fresh_scene():
    """Create a fresh SceneManager."""
    from src.tinytracer.scene.manager import SceneManager

    return SceneManager()


class TestSceneLoading:
    """Tests for SceneManager.load."""

    def test_load_default_scene(self, fresh_scene):
        from src.tinytracer.scene.intersection import get_background
        from src.tinytracer.scene.model import default_scene

        fresh_scene.load(default_scene())
        assert fresh_scene.get_sphere_count() == 3
        assert fresh_scene.get_light_count() == 1
        assert fresh_scene.get_material_count() == 3
        assert all(abs(c - 0.3) < 1e-6 for c in get_background())
        assert fresh_scene.scene == default_scene()

    def test_sphere_info_order(self, fresh_scene):
        from src.tinytracer.scene.model import default_scene

        fresh_scene.load(default_scene())
        assert [s.sphere_index for s in fresh_scene.spheres] == [0, 1, 2]
        assert fresh_scene.spheres[1].center == (100.0, 200.0, 800.0)
        assert fresh_scene.spheres[2].radius == 100.0

    def test_identical_materials_share_a_slot(self, fresh_scene):
        from src.tinytracer.scene.model import Material, Scene, SceneSphere

        red = Material(diffuse_color="red")
        scene = Scene(
            spheres=(
                SceneSphere((0.0, 0.0, 10.0), 1.0, red),
                SceneSphere((0.0, 0.0, 20.0), 1.0, Material(diffuse_color=(1.0, 0.0, 0.0))),
                SceneSphere((0.0, 0.0, 30.0), 1.0, Material(diffuse_color="blue")),
            )
        )
        fresh_scene.load(scene)
        assert fresh_scene.get_material_count() == 2
        assert [s.material_id for s in fresh_scene.spheres] == [0, 0, 1]

    def test_reload_replaces_scene(self, fresh_scene):
        from src.tinytracer.scene.model import Scene, SceneSphere, default_scene

        fresh_scene.load(default_scene())
        fresh_scene.load(Scene(spheres=(SceneSphere((0.0, 0.0, 5.0), 1.0),)))
        assert fresh_scene.get_sphere_count() == 1
        assert fresh_scene.get_light_count() == 0
        assert fresh_scene.get_material_count() == 1

    def test_clear(self, fresh_scene):
        from src.tinytracer.scene.model import default_scene

        fresh_scene.load(default_scene())
        fresh_scene.clear()
        assert fresh_scene.scene is None
        assert fresh_scene.spheres == []
        assert fresh_scene.get_sphere_count() == 0
        assert fresh_scene.get_material_count() == 0

    def test_too_many_lights(self, fresh_scene):
        from src.tinytracer.scene.intersection import MAX_LIGHTS
        from src.tinytracer.scene.model import PointLight, Scene

        lights = tuple(PointLight((0.0, 0.0, 0.0)) for _ in range(MAX_LIGHTS + 1))
        with pytest.raises(RuntimeError, match="lights"):
            fresh_scene.load(Scene(lights=lights))

    def test_capacities(self, fresh_scene):
        from src.tinytracer.materials.phong import MAX_MATERIALS
        from src.tinytracer.scene.intersection import MAX_SPHERES

        assert fresh_scene.get_max_spheres() == MAX_SPHERES
        assert fresh_scene.get_max_materials() == MAX_MATERIALS

