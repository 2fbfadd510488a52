"""Pinhole camera for primary ray generation.

The camera sits at a fixed position looking down +z with +x to the right
and +y up. Its image plane lies at `focal_length` in front of the camera and
its extent along each axis is derived from the field of view:

    screen_x = tan(horizontal_fov / 2) * focal_length
    screen_y = tan(vertical_fov / 2) * focal_length

A pixel (x, y), with y = 0 the top row, maps to the normalized direction

    ((x - width / 2) * screen_x / width,
     -(y - height / 2) * screen_y / height,
     focal_length)

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tinytracer.camera.pinhole import PinholeCamera, setup_camera
    >>> setup_camera(PinholeCamera(focal_length=100.0, horizontal_fov=120.0))
    >>> # Use camera_ray(x, y, width, height) within a Taichi kernel
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti

from src.tinytracer.core.ray import Ray, make_ray, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole camera looking down +z.

    Attributes:
        focal_length: Distance from the camera to the image plane.
        horizontal_fov: Horizontal field of view in degrees.
        vertical_fov: Vertical field of view in degrees.
        position: Camera position in world space (x, y, z).
    """

    focal_length: float = 100.0
    horizontal_fov: float = 120.0
    vertical_fov: float = 100.0
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_position = ti.Vector.field(3, dtype=ti.f32, shape=())
_focal_length = ti.field(dtype=ti.f32, shape=())

# Image plane extent (x, y) at the focal distance
_screen_size = ti.Vector.field(2, dtype=ti.f32, shape=())


# =============================================================================
# Camera Setup (Python-side, called once per camera configuration)
# =============================================================================


def setup_camera(camera: PinholeCamera) -> None:
    """Initialize camera state from configuration.

    Args:
        camera: Camera configuration with position, focal length and FOV.

    Raises:
        ValueError: If the focal length is not positive or a field of view
            is outside (0, 180) degrees.
    """
    if camera.focal_length <= 0.0:
        raise ValueError(f"Focal length must be positive, got {camera.focal_length}")
    for name, fov in (
        ("horizontal_fov", camera.horizontal_fov),
        ("vertical_fov", camera.vertical_fov),
    ):
        if not 0.0 < fov < 180.0:
            raise ValueError(f"{name} must be in (0, 180) degrees, got {fov}")

    screen = np.array(
        [
            math.tan(math.radians(camera.horizontal_fov * 0.5)),
            math.tan(math.radians(camera.vertical_fov * 0.5)),
        ],
        dtype=np.float32,
    ) * np.float32(camera.focal_length)

    _camera_position[None] = list(camera.position)
    _focal_length[None] = camera.focal_length
    _screen_size[None] = screen.tolist()


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def camera_ray(pixel_x: ti.i32, pixel_y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through a pixel.

    Args:
        pixel_x: Pixel column (0 = left).
        pixel_y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera position with a unit direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    screen = _screen_size[None]

    # Row index grows downward in the frame buffer, +y is up in the world
    direction = vec3(
        (ti.cast(pixel_x, ti.f32) - w * 0.5) * screen[0] / w,
        -(ti.cast(pixel_y, ti.f32) - h * 0.5) * screen[1] / h,
        _focal_length[None],
    )
    return make_ray(_camera_position[None], normalize(direction))


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, float | tuple[float, ...]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with position, focal_length and screen_size.
    """
    pos = _camera_position[None]
    screen = _screen_size[None]
    return {
        "position": (float(pos[0]), float(pos[1]), float(pos[2])),
        "focal_length": float(_focal_length[None]),
        "screen_size": (float(screen[0]), float(screen[1])),
    }

