"""Local (direct) illumination with hard shadows.

For every point light the surface point casts a shadow ray toward the light.
A light is skipped entirely when any sphere lies strictly between the biased
shadow-ray origin and the light; otherwise it contributes

    diffuse  += intensity * max(0, dot(light_dir, normal))
    specular += max(0, dot(reflect(light_dir, normal), view_dir)) ** exponent

and the shaded color is

    kd * diffuse_color * diffuse + ks * specular_color * specular

There is no ambient term and the result is not clamped.
"""

import taichi as ti
import taichi.math as tm

from src.tinytracer.core.ray import dot, length_squared, normalize, offset_ray_origin, reflect
from src.tinytracer.materials.phong import PhongMaterial
from src.tinytracer.scene.intersection import (
    intersect_scene,
    light_intensities,
    light_positions,
    num_lights,
)

vec3 = tm.vec3


@ti.func
def is_light_occluded(point: vec3, normal: vec3, light_position: vec3) -> ti.i32:
    """Test whether a sphere blocks the segment from a surface point to a light.

    Args:
        point: The surface point.
        normal: The surface normal at the point.
        light_position: The light position.

    Returns:
        1 if an occluder is hit closer than the light, 0 otherwise.
    """
    light_dir = normalize(light_position - point)
    shadow_origin = offset_ray_origin(point, normal, light_dir)
    shadow_hit = intersect_scene(shadow_origin, light_dir)

    occluded = 0
    if shadow_hit.hit == 1:
        occluder_dist2 = length_squared(shadow_hit.point - shadow_origin)
        light_dist2 = length_squared(light_position - shadow_origin)
        if occluder_dist2 < light_dist2:
            occluded = 1
    return occluded


@ti.func
def shade_local(view_dir: vec3, point: vec3, normal: vec3, material: PhongMaterial) -> vec3:
    """Compute the Phong diffuse and specular color at a surface point.

    Args:
        view_dir: Direction of the incoming ray (unit, toward the surface).
        point: The surface point.
        normal: The outward unit normal at the point.
        material: The surface material.

    Returns:
        The unclamped RGB color from all unoccluded lights.
    """
    diffuse_sum = 0.0
    specular_sum = 0.0

    for i in range(num_lights[None]):
        light_position = light_positions[i]
        if is_light_occluded(point, normal, light_position) == 0:
            light_dir = normalize(light_position - point)
            diffuse_sum += light_intensities[i] * ti.max(0.0, dot(light_dir, normal))
            specular_cos = ti.max(0.0, dot(reflect(light_dir, normal), view_dir))
            specular_sum += ti.pow(specular_cos, material.specular_exponent)

    return (
        material.kd * material.diffuse_color * diffuse_sum
        + material.ks * material.specular_color * specular_sum
    )
