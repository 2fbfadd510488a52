"""Sphere primitive with closed-form ray-sphere intersection.

The intersection solves |origin + t * direction - center|^2 = radius^2 for t.
Because ray directions are unit length, the quadratic coefficient a is
always 1 and is dropped:

    oc = origin - center
    b = 2 * dot(oc, direction)
    c = dot(oc, oc) - radius^2
    discriminant = b^2 - 4c

The nearer non-negative root is reported; a ray starting inside the sphere
therefore hits the far wall, and a sphere entirely behind the origin is a
miss.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tinytracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, 600), radius=200.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.tinytracer.core.ray import dot, is_unit_length, normalize

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere):
    """Test a ray against a sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray. Must be unit length; a
            non-unit direction yields wrong distances and trips an assertion
            when Taichi runs in debug mode.
        sphere: The sphere to test.

    Returns:
        A tuple of (hit, t) where:
        - hit: 1 if the sphere is intersected at t >= 0, 0 otherwise.
        - t: The smallest non-negative root. Only valid if hit == 1.
    """
    assert is_unit_length(ray_direction), "hit_sphere: ray direction must be unit length"

    center_to_ray = ray_origin - sphere.center
    b = 2.0 * dot(center_to_ray, ray_direction)
    c = dot(center_to_ray, center_to_ray) - sphere.radius * sphere.radius
    discriminant = b * b - 4.0 * c

    did_hit = 0
    hit_t = 0.0

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t1 = (-b - sqrt_d) / 2.0
        t2 = (-b + sqrt_d) / 2.0

        if t1 >= 0.0:
            did_hit = 1
            hit_t = t1
        elif t2 >= 0.0:
            did_hit = 1
            hit_t = t2

    return did_hit, hit_t


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Outward unit normal of the sphere at a surface point."""
    return normalize(point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
