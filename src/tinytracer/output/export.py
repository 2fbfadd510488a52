"""Image export utilities for rendered images.

Rendered colors are unclamped floats. On export every channel is clamped to
[0, 1] and scaled to a byte (truncating), then written as:

    - PPM (binary P6, no external dependency)
    - PNG (8-bit via Pillow)

Example:
    >>> from src.tinytracer.core.integrator import get_image_numpy
    >>> from src.tinytracer.output.export import save_image
    >>> save_image(get_image_numpy(), "out.ppm")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit.

    Args:
        image: Image array of shape (H, W, 3), any float range.

    Returns:
        Array of shape (H, W, 3) with dtype uint8.
    """
    clamped = np.clip(image.astype(np.float32), 0.0, 1.0)
    return (clamped * 255.0).astype(np.uint8)


def _check_shape(image: npt.NDArray[np.floating]) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Image must have shape (H, W, 3), got {image.shape}")


def save_ppm(image: npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save an image as a binary PPM (P6) file.

    Pixels are written row by row starting at the top row.

    Args:
        image: Image array of shape (H, W, 3).
        filepath: Output file path.

    Raises:
        ValueError: If the image does not have shape (H, W, 3).
    """
    _check_shape(image)
    height, width, _ = image.shape
    header = f"P6\n{width} {height}\n255\n".encode("ascii")
    with open(filepath, "wb") as f:
        f.write(header)
        f.write(image_to_uint8(image).tobytes())


def save_png(image: npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save an image as an 8-bit PNG file.

    Args:
        image: Image array of shape (H, W, 3).
        filepath: Output file path.

    Raises:
        ValueError: If the image does not have shape (H, W, 3).
    """
    _check_shape(image)
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)


def save_image(image: npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save an image, choosing the format from the file suffix.

    Args:
        image: Image array of shape (H, W, 3).
        filepath: Output path ending in .ppm or .png.

    Raises:
        ValueError: If the suffix is not supported.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(image, filepath)
    elif suffix == ".png":
        save_png(image, filepath)
    else:
        raise ValueError(f"Unsupported image format: {suffix!r} (use .ppm or .png)")
