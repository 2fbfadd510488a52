"""Geometry module for the sphere primitive.

Intersection follows the pattern:
    hit, t = hit_sphere(ray_origin, ray_direction, sphere)
"""

from .sphere import Sphere, hit_sphere, make_sphere, sphere_normal

__all__ = [
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "sphere_normal",
]
