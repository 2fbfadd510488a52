"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera at a fixed position looking down +z

Pixel coordinates run left to right (x) and top to bottom (y).
"""

from .pinhole import PinholeCamera, camera_ray, get_camera_info, setup_camera

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "camera_ray",
    "get_camera_info",
]
