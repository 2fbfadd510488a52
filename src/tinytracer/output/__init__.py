"""Output module for writing rendered images."""

from .export import image_to_uint8, save_image, save_png, save_ppm

__all__ = [
    "image_to_uint8",
    "save_ppm",
    "save_png",
    "save_image",
]
