"""Core rendering module.

Components:
    ray: Ray data structure and vector utilities (reflect, refract, bias)
    shading: Local Phong shading with shadow rays
    integrator: Depth-bounded Whitted ray caster and render loop

All per-ray work runs in Taichi functions so the render loop can be
parallelized across pixels.
"""

from .ray import (
    RAY_BIAS,
    Ray,
    color3,
    dot,
    is_unit_length,
    length,
    length_squared,
    make_ray,
    normalize,
    offset_ray_origin,
    ray_at,
    reflect,
    refract,
    vec3,
)

# Note: shading and integrator are NOT imported here to avoid circular imports.
# Import directly from src.tinytracer.core.shading or src.tinytracer.core.integrator.

__all__ = [
    "Ray",
    "RAY_BIAS",
    "ray_at",
    "make_ray",
    "vec3",
    "color3",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "is_unit_length",
    "reflect",
    "refract",
    "offset_ray_origin",
]
