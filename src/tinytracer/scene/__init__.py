"""Scene module for scene description, storage and ray-scene queries.

Components:
    model: Immutable scene description (materials, spheres, lights)
    intersection: Scene storage in Taichi fields and nearest-hit queries
    manager: Uploads a scene description into the Taichi fields
"""

from .intersection import (
    MAX_LIGHTS,
    MAX_SPHERES,
    SceneHitRecord,
    add_light,
    add_sphere,
    clear_scene,
    get_background,
    get_light_count,
    get_sphere_count,
    intersect_scene,
    set_background,
)
from .manager import SceneManager, SphereInfo
from .model import (
    NAMED_COLORS,
    Material,
    PointLight,
    Scene,
    SceneSphere,
    default_scene,
    load_scene_file,
    resolve_color,
    save_scene_file,
    scene_from_dict,
    scene_to_dict,
)

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "add_light",
    "set_background",
    "clear_scene",
    "get_sphere_count",
    "get_light_count",
    "get_background",
    "intersect_scene",
    "MAX_SPHERES",
    "MAX_LIGHTS",
    # Manager module
    "SceneManager",
    "SphereInfo",
    # Model module
    "Material",
    "SceneSphere",
    "PointLight",
    "Scene",
    "NAMED_COLORS",
    "resolve_color",
    "default_scene",
    "scene_to_dict",
    "scene_from_dict",
    "load_scene_file",
    "save_scene_file",
]
