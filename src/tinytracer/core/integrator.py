"""Whitted-style ray tracing integrator.

This module implements the depth-bounded recursive ray caster: a hit
surface contributes its local Phong shading, a mirror reflection weighted by
kr and a refraction weighted by kt, each secondary ray consuming one unit of
depth. Rays that miss every sphere, or that run out of depth, return the
background color.

Taichi functions cannot recurse, so the recursion is unrolled into a work
list. The reflection branch is followed in place and every refraction branch
is pushed with its accumulated weight and remaining depth. Pushed depths
strictly decrease from the bottom of the stack to its top, so no more than
`depth` rays are ever pending and the stack is sized by MAX_DEPTH. A single
primary ray may still expand into up to 2**depth ray casts.

Rendering runs one kernel over all pixels. Every pixel is independent and
the scene fields are read-only during a render, so Taichi parallelizes the
outermost loop with no synchronization.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tinytracer.camera.pinhole import PinholeCamera, setup_camera
    >>> from src.tinytracer.core.integrator import (
    ...     cast_ray, render_image, setup_render_target
    ... )
    >>> from src.tinytracer.scene.model import default_scene
    >>> cast_ray((0, 0, 0), (0, 0, 1), default_scene(), depth=10)
    >>> setup_camera(PinholeCamera())
    >>> setup_render_target(1024, 768)
    >>> render_image(depth=10)
"""

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.tinytracer.camera.pinhole import camera_ray
from src.tinytracer.core.ray import offset_ray_origin, reflect, refract
from src.tinytracer.core.shading import shade_local
from src.tinytracer.materials.phong import get_phong_material
from src.tinytracer.scene.intersection import background_color, intersect_scene
from src.tinytracer.scene.manager import SceneManager

if TYPE_CHECKING:
    from collections.abc import Sequence

    from src.tinytracer.scene.model import Scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum supported bounce depth (sizes the pending-ray stack)
MAX_DEPTH = 32

# Depth used when the caller does not pass one
DEFAULT_DEPTH = 10

# Pending refraction rays never exceed the starting depth
STACK_SIZE = MAX_DEPTH


def _check_depth(depth: int) -> None:
    """Validate a bounce depth before it reaches a kernel."""
    if depth < 0 or depth > MAX_DEPTH:
        raise ValueError(f"Depth must be in [0, {MAX_DEPTH}], got {depth}")


# =============================================================================
# Ray Casting Core
# =============================================================================


@ti.func
def trace_ray(ray_origin: vec3, ray_direction: vec3, depth: ti.i32) -> vec3:
    """Cast a ray into the scene and return the color it carries back.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        depth: Remaining bounce depth (0 returns the background color).

    Returns:
        The unclamped RGB color seen along the ray.
    """
    background = background_color[None]
    color = vec3(0.0, 0.0, 0.0)

    # Pending rays, one vector per component: origin, direction, weight, depth
    stack_ox = ti.Vector.zero(ti.f32, STACK_SIZE)
    stack_oy = ti.Vector.zero(ti.f32, STACK_SIZE)
    stack_oz = ti.Vector.zero(ti.f32, STACK_SIZE)
    stack_dx = ti.Vector.zero(ti.f32, STACK_SIZE)
    stack_dy = ti.Vector.zero(ti.f32, STACK_SIZE)
    stack_dz = ti.Vector.zero(ti.f32, STACK_SIZE)
    stack_weight = ti.Vector.zero(ti.f32, STACK_SIZE)
    stack_depth = ti.Vector.zero(ti.i32, STACK_SIZE)

    stack_ox[0] = ray_origin[0]
    stack_oy[0] = ray_origin[1]
    stack_oz[0] = ray_origin[2]
    stack_dx[0] = ray_direction[0]
    stack_dy[0] = ray_direction[1]
    stack_dz[0] = ray_direction[2]
    stack_weight[0] = 1.0
    stack_depth[0] = depth
    top = 1

    while top > 0:
        top -= 1
        origin = vec3(stack_ox[top], stack_oy[top], stack_oz[top])
        direction = vec3(stack_dx[top], stack_dy[top], stack_dz[top])
        weight = stack_weight[top]
        remaining = stack_depth[top]

        active = 1
        while active == 1:
            if remaining == 0:
                color += weight * background
                active = 0
            else:
                hit = intersect_scene(origin, direction)
                if hit.hit == 0:
                    color += weight * background
                    active = 0
                else:
                    material = get_phong_material(hit.material_id)

                    if material.kd > 0.0 or material.ks > 0.0:
                        color += weight * shade_local(direction, hit.point, hit.normal, material)

                    if material.kt > 0.0 and material.refractive_index > 0.0:
                        refracted, ok = refract(direction, hit.normal, material.refractive_index)
                        # Total internal reflection contributes nothing
                        if ok == 1:
                            assert top < STACK_SIZE, "trace_ray: pending ray stack overflow"
                            refract_origin = offset_ray_origin(hit.point, hit.normal, refracted)
                            stack_ox[top] = refract_origin[0]
                            stack_oy[top] = refract_origin[1]
                            stack_oz[top] = refract_origin[2]
                            stack_dx[top] = refracted[0]
                            stack_dy[top] = refracted[1]
                            stack_dz[top] = refracted[2]
                            stack_weight[top] = weight * material.kt
                            stack_depth[top] = remaining - 1
                            top += 1

                    if material.kr > 0.0:
                        reflected = reflect(direction, hit.normal)
                        origin = offset_ray_origin(hit.point, hit.normal, reflected)
                        direction = reflected
                        weight *= material.kr
                        remaining -= 1
                    else:
                        active = 0

    return color


@ti.kernel
def _cast_ray_kernel(
    ox: ti.f32,
    oy: ti.f32,
    oz: ti.f32,
    dx: ti.f32,
    dy: ti.f32,
    dz: ti.f32,
    depth: ti.i32,
) -> vec3:
    """Cast a single ray from Python scope."""
    return trace_ray(vec3(ox, oy, oz), vec3(dx, dy, dz), depth)


def cast_ray(
    ray_origin: "Sequence[float]",
    ray_direction: "Sequence[float]",
    scene: "Scene | None" = None,
    depth: int = DEFAULT_DEPTH,
) -> tuple[float, float, float]:
    """Cast one ray and return its color.

    Args:
        ray_origin: The ray origin as (x, y, z).
        ray_direction: The ray direction as (x, y, z). Must already be unit
            length; it is not re-normalized.
        scene: Scene snapshot to upload before casting. When None, the scene
            currently loaded in the Taichi fields is used.
        depth: Bounce depth in [0, MAX_DEPTH].

    Returns:
        Tuple of (R, G, B) color values, unclamped.

    Raises:
        ValueError: If depth is out of range.
    """
    _check_depth(depth)
    if scene is not None:
        SceneManager().load(scene)

    color = _cast_ray_kernel(
        ray_origin[0],
        ray_origin[1],
        ray_origin[2],
        ray_direction[0],
        ray_direction[1],
        ray_direction[2],
        depth,
    )
    return (float(color[0]), float(color[1]), float(color[2]))


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color buffer indexed [x, y] with y = 0 the top row (preallocated to max size)
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffer.

    Sets the active image dimensions and clears the buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum
            supported size.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the render target buffer to black."""
    _color_buffer.fill(0.0)


def reset_render_target() -> None:
    """Clear the buffer and mark the render target as not set up."""
    clear_render_target()
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def get_image() -> "ti.MatrixField":
    """Get the color buffer.

    Note: This returns the full preallocated buffer. Use get_image_dimensions()
    to determine the active region.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    return _color_buffer


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32, depth: ti.i32):
    """Trace one camera ray per pixel into the color buffer."""
    for i, j in ti.ndrange(width, height):
        ray = camera_ray(i, j, width, height)
        _color_buffer[i, j] = trace_ray(ray.origin, ray.direction, depth)


def render_image(depth: int = DEFAULT_DEPTH) -> None:
    """Render every pixel of the render target with the loaded scene and camera.

    Args:
        depth: Bounce depth in [0, MAX_DEPTH].

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If depth is out of range.
    """
    _check_render_target_initialized()
    _check_depth(depth)

    width, height = get_image_dimensions()
    _render_kernel(width, height, depth)


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Values are left unclamped; clamping happens when the image is written.

    Returns:
        Array of shape (height, width, 3) with row 0 the top of the image.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _color_buffer.to_numpy()

    # (width, height, 3) -> (height, width, 3)
    image = np.transpose(full_image[:width, :height, :], (1, 0, 2))
    return np.ascontiguousarray(image, dtype=np.float32)
