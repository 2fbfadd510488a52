"""Phong material model and material registry.

A Phong material combines a diffuse term (Lambert cosine) and a specular
term (power of the cosine between the mirrored light direction and the view
direction) with mirror reflection and refraction weights used by the
integrator:

    kd: weight of the diffuse term
    ks: weight of the specular term
    kr: weight of the recursively traced reflection
    kt: weight of the recursively traced refraction

The coefficients are independent and need not sum to 1. The refractive
index only matters when kt > 0.

Materials live in Taichi fields so kernels can look them up by index.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tinytracer.materials.phong import add_phong_material
    >>> red = add_phong_material(diffuse_color=(1.0, 0.0, 0.0), kd=1.0)
    >>> # Use get_phong_material(red) within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class PhongMaterial:
    """Phong material properties.

    Attributes:
        diffuse_color: Diffuse reflectance color (RGB).
        specular_color: Specular highlight color (RGB).
        specular_exponent: Shininess; larger values give tighter highlights.
        refractive_index: Index of refraction (> 0).
        kd: Diffuse coefficient.
        ks: Specular coefficient.
        kr: Reflective coefficient.
        kt: Transmissive (refractive) coefficient.
    """

    diffuse_color: vec3
    specular_color: vec3
    specular_exponent: ti.f32
    refractive_index: ti.f32
    kd: ti.f32
    ks: ti.f32
    kr: ti.f32
    kt: ti.f32


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of Phong materials in the scene
MAX_MATERIALS = 1024

# Storage for material properties (Structure of Arrays layout)
material_diffuse_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_specular_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_specular_exponents = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_refractive_indices = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_kd = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_ks = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_kr = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_kt = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_phong_materials() -> None:
    """Clear all Phong materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_phong_material(
    diffuse_color: tuple[float, float, float] = (1.0, 1.0, 1.0),
    specular_color: tuple[float, float, float] = (1.0, 1.0, 1.0),
    specular_exponent: float = 50.0,
    refractive_index: float = 1.0,
    kd: float = 1.0,
    ks: float = 0.0,
    kr: float = 0.0,
    kt: float = 0.0,
) -> int:
    """Add a Phong material to the material registry.

    Args:
        diffuse_color: The diffuse color as (R, G, B).
        specular_color: The specular color as (R, G, B).
        specular_exponent: The specular exponent (shininess), >= 0.
        refractive_index: Index of refraction, > 0.
        kd: Diffuse coefficient, >= 0.
        ks: Specular coefficient, >= 0.
        kr: Reflective coefficient, >= 0.
        kt: Transmissive coefficient, >= 0.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the refractive index is not positive or any
            coefficient is negative.
    """
    if refractive_index <= 0.0:
        raise ValueError(f"Refractive index must be positive, got {refractive_index}")
    for name, value in (
        ("specular_exponent", specular_exponent),
        ("kd", kd),
        ("ks", ks),
        ("kr", kr),
        ("kt", kt),
    ):
        if value < 0.0:
            raise ValueError(f"{name} must be non-negative, got {value}")

    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_diffuse_colors[idx] = vec3(diffuse_color[0], diffuse_color[1], diffuse_color[2])
    material_specular_colors[idx] = vec3(specular_color[0], specular_color[1], specular_color[2])
    material_specular_exponents[idx] = specular_exponent
    material_refractive_indices[idx] = refractive_index
    material_kd[idx] = kd
    material_ks[idx] = ks
    material_kr[idx] = kr
    material_kt[idx] = kt
    num_materials[None] = idx + 1
    return idx


def get_phong_material_count() -> int:
    """Get the number of Phong materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_phong_material(material_idx: ti.i32) -> PhongMaterial:
    """Copy a material out of the registry.

    Args:
        material_idx: The index of the material in the registry.

    Returns:
        A PhongMaterial holding the stored properties.
    """
    return PhongMaterial(
        diffuse_color=material_diffuse_colors[material_idx],
        specular_color=material_specular_colors[material_idx],
        specular_exponent=material_specular_exponents[material_idx],
        refractive_index=material_refractive_indices[material_idx],
        kd=material_kd[material_idx],
        ks=material_ks[material_idx],
        kr=material_kr[material_idx],
        kt=material_kt[material_idx],
    )
