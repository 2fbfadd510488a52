"""Scene-level storage and nearest-hit ray intersection.

This module stores the spheres, point lights and background color of the
scene being rendered in Taichi fields and provides the scene intersection
resolver used for primary, shadow, reflection and refraction rays.

The resolver scans the spheres linearly in insertion order and keeps the
smallest non-negative hit distance. The comparison is strict, so of two
spheres hit at exactly the same distance the first one added wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tinytracer.scene.intersection import (
    ...     SceneHitRecord, add_sphere, add_light, intersect_scene, clear_scene
    ... )
    >>> clear_scene()
    >>> add_sphere(vec3(0, 0, 600), 200.0, material_id=0)
    >>> add_light(vec3(0, 500, 300), 1.0)
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.tinytracer.geometry.sphere import Sphere, hit_sphere, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection with material information.

    Attributes:
        hit: Whether the ray intersected any sphere (1 if hit, 0 if miss).
        t: Distance along the ray to the intersection.
            Only valid if hit == 1.
        point: The 3D point where the ray intersected the surface.
            Only valid if hit == 1.
        normal: The outward surface normal at the intersection point
            (unit length, pointing from the sphere center through the point).
            Only valid if hit == 1.
        material_id: The material ID of the hit sphere.
            Only valid if hit == 1. -1 for a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material_id: ti.i32


# Maximum number of primitives and lights supported in the scene
MAX_SPHERES = 1024
MAX_LIGHTS = 64

# Upper bound for hit distances
T_MAX = 3.0e38

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Point light storage
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Color returned for rays that escape the scene or run out of depth
background_color = ti.Vector.field(3, dtype=ti.f32, shape=())


def clear_scene() -> None:
    """Clear all spheres and lights and reset the background to black.

    The field data is not cleared but will be overwritten when new
    primitives are added.
    """
    num_spheres[None] = 0
    num_lights[None] = 0
    background_color[None] = vec3(0.0, 0.0, 0.0)


def add_sphere(center: vec3, radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        material_id: The material ID to associate with this sphere.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
        ValueError: If the radius is not positive.
    """
    if radius <= 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = center
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def add_light(position: vec3, intensity: float) -> int:
    """Add a point light to the scene.

    Args:
        position: The light position.
        intensity: The light intensity (must be non-negative).

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
        ValueError: If the intensity is negative.
    """
    if intensity < 0.0:
        raise ValueError(f"Light intensity must be non-negative, got {intensity}")
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = position
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def set_background(color: vec3) -> None:
    """Set the background color."""
    background_color[None] = color


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


def get_background() -> tuple[float, float, float]:
    """Get the background color as an (R, G, B) tuple."""
    bg = background_color[None]
    return (float(bg[0]), float(bg[1]), float(bg[2]))


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material_id=-1,
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest sphere hit along a ray.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        A SceneHitRecord for the closest intersection at t >= 0, or a miss
        record if no sphere is hit.
    """
    closest_t = T_MAX
    closest_idx = -1

    n_spheres = num_spheres[None]
    for i in range(n_spheres):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        did_hit, t = hit_sphere(ray_origin, ray_direction, sphere)
        if did_hit == 1 and t < closest_t:
            closest_t = t
            closest_idx = i

    result = _make_miss_record()
    if closest_idx >= 0:
        sphere = Sphere(center=sphere_centers[closest_idx], radius=sphere_radii[closest_idx])
        point = ray_origin + closest_t * ray_direction
        result = SceneHitRecord(
            hit=1,
            t=closest_t,
            point=point,
            normal=sphere_normal(sphere, point),
            material_id=sphere_material_ids[closest_idx],
        )
    return result
