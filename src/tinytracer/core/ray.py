"""Ray data structure and vector utilities for Whitted-style ray tracing.

This module provides the Ray dataclass and the small vector algebra the
tracer is built on: dot products, lengths, zero-safe normalization, mirror
reflection, Snell's-law refraction and the origin bias applied to secondary
rays. Colors share the vector type (three unclamped f32 channels).

All functions are Taichi functions and must be called from within kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Colors are RGB triples stored in the same vector type
color3 = tm.vec3

# Fixed offset applied to secondary ray origins to avoid self-intersection.
# Absolute (not scale-relative); changing it changes rendered output.
RAY_BIAS = 1e-3

# Tolerance on |direction|^2 - 1 for the unit-direction precondition
UNIT_LENGTH_TOLERANCE = 1e-3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Must be unit
            length; intersection routines rely on it and do not re-normalize.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Used wherever only magnitudes are compared (shadow occlusion, the
    unit-direction check), avoiding the square root.
    """
    return dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Unlike tm.normalize, a zero-length vector is returned unchanged
    instead of being divided by zero.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v, or v itself when its
        length is not positive.
    """
    result = v
    len_v = length(v)
    if len_v > 0.0:
        result = v / len_v
    return result


@ti.func
def is_unit_length(v: vec3) -> ti.i32:
    """Check whether a vector has unit length within UNIT_LENGTH_TOLERANCE."""
    return ti.abs(length_squared(v) - 1.0) < UNIT_LENGTH_TOLERANCE


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes incident - 2 * normal * dot(incident, normal). The normal must
    be unit length.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (normalized).

    Returns:
        The mirrored direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal


@ti.func
def refract(incident: vec3, normal: vec3, refractive_index: ti.f32):
    """Refract an incident vector through a sphere surface using Snell's law.

    The normal is the outward surface normal. When the incident direction
    points along it (cosine of incidence negative) the ray is leaving the
    medium: the normal is flipped and the index ratio swapped so that the
    ray exits into index 1.0.

    Args:
        incident: The incoming direction vector (normalized).
        normal: The outward surface normal (normalized).
        refractive_index: Index of refraction of the medium. Must be > 0.

    Returns:
        A tuple of (direction, ok) where:
        - direction: The normalized refracted direction, or a zero vector
          on total internal reflection.
        - ok: 1 if a refracted direction exists, 0 on total internal
          reflection.
    """
    assert refractive_index > 0.0, "refract: refractive index must be positive"

    cos_i = -tm.clamp(dot(incident, normal), -1.0, 1.0)
    eta_i = 1.0
    eta_t = refractive_index
    n = normal
    if cos_i < 0.0:
        # Inside the medium: exit into index 1.0 through the inner side
        cos_i = -cos_i
        temp = eta_i
        eta_i = eta_t
        eta_t = temp
        n = -normal

    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)

    direction = vec3(0.0, 0.0, 0.0)
    ok = 0
    if k >= 0.0:
        direction = normalize(incident * eta + n * (eta * cos_i - ti.sqrt(k)))
        ok = 1
    return direction, ok


@ti.func
def offset_ray_origin(point: vec3, normal: vec3, direction: vec3) -> vec3:
    """Bias a secondary ray origin to avoid re-hitting its own surface.

    Moves the point RAY_BIAS along the normal, to the side the new ray
    travels into: along -normal when dot(direction, normal) < 0, along
    +normal otherwise.

    Args:
        point: The intersection point.
        normal: The surface normal at the point.
        direction: The direction of the ray about to be spawned.

    Returns:
        The offset origin point.
    """
    offset_dir = normal
    if dot(direction, normal) < 0.0:
        offset_dir = -normal
    return point + RAY_BIAS * offset_dir
