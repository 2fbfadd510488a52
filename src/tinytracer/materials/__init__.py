"""Materials module.

Components:
    phong: Phong material (diffuse, specular, reflection and refraction
        weights) and the material registry stored in Taichi fields
"""

from .phong import (
    MAX_MATERIALS,
    PhongMaterial,
    add_phong_material,
    clear_phong_materials,
    get_phong_material,
    get_phong_material_count,
)

__all__ = [
    "PhongMaterial",
    "MAX_MATERIALS",
    "add_phong_material",
    "clear_phong_materials",
    "get_phong_material",
    "get_phong_material_count",
]
