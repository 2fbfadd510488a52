"""Scene manager for uploading scene snapshots to Taichi fields.

The SceneManager copies an immutable Scene into the sphere, light, material
and background fields read by the kernels. Identical materials share one
registry slot, so a scene with many spheres of the same material uploads it
once.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tinytracer.scene.manager import SceneManager
    >>> from src.tinytracer.scene.model import default_scene
    >>> manager = SceneManager()
    >>> manager.load(default_scene())
    >>> manager.get_sphere_count()
    3
"""

from dataclasses import dataclass

import taichi.math as tm

from src.tinytracer.materials.phong import (
    MAX_MATERIALS,
    add_phong_material,
    clear_phong_materials,
    get_phong_material_count,
)
from src.tinytracer.scene.intersection import (
    MAX_LIGHTS,
    MAX_SPHERES,
    add_light,
    add_sphere,
    clear_scene,
    get_light_count,
    get_sphere_count,
    set_background,
)
from src.tinytracer.scene.model import Material, Scene

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass
class SphereInfo:
    """Information about an uploaded sphere.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


class SceneManager:
    """Uploads a Scene into the Taichi fields used for rendering.

    Attributes:
        scene: The currently loaded scene, or None.
        spheres: SphereInfo for every uploaded sphere, in intersection order.
        material_ids: Registry slot of every distinct uploaded material.
    """

    def __init__(self) -> None:
        """Initialize with an empty scene."""
        self.scene: Scene | None = None
        self.spheres: list[SphereInfo] = []
        self.material_ids: dict[Material, int] = {}
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        clear_phong_materials()
        self.scene = None
        self.spheres.clear()
        self.material_ids.clear()

    def clear(self) -> None:
        """Clear the loaded scene (primitives, lights and materials)."""
        self._clear_all()

    def load(self, scene: Scene) -> None:
        """Replace the loaded scene with a new snapshot.

        Args:
            scene: The scene to upload.

        Raises:
            RuntimeError: If the scene exceeds the sphere, light or material
                capacity.
        """
        if len(scene.spheres) > MAX_SPHERES:
            raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
        if len(scene.lights) > MAX_LIGHTS:
            raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

        self._clear_all()
        set_background(vec3(*scene.background))

        for sphere in scene.spheres:
            material_id = self.add_material(sphere.material)
            sphere_index = add_sphere(vec3(*sphere.center), sphere.radius, material_id)
            self.spheres.append(
                SphereInfo(
                    sphere_index=sphere_index,
                    center=sphere.center,
                    radius=sphere.radius,
                    material_id=material_id,
                )
            )

        for light in scene.lights:
            add_light(vec3(*light.position), light.intensity)

        self.scene = scene

    def add_material(self, material: Material) -> int:
        """Register a material, reusing the slot of an identical one.

        Args:
            material: The material to register.

        Returns:
            The material ID.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
        """
        material_id = self.material_ids.get(material)
        if material_id is None:
            material_id = add_phong_material(
                diffuse_color=material.diffuse_color,
                specular_color=material.specular_color,
                specular_exponent=material.specular_exponent,
                refractive_index=material.refractive_index,
                kd=material.kd,
                ks=material.ks,
                kr=material.kr,
                kt=material.kt,
            )
            self.material_ids[material] = material_id
        return material_id

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return get_light_count()

    def get_material_count(self) -> int:
        """Get the number of distinct materials in the scene."""
        return get_phong_material_count()

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_materials() -> int:
        """Get the maximum number of materials supported."""
        return MAX_MATERIALS
