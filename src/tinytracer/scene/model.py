"""Immutable scene description.

A Scene is a snapshot of spheres, point lights and a background color. It is
built once, handed to SceneManager.load() which copies it into Taichi
fields, and never modified by the renderer.

Colors can be given as (R, G, B) sequences or by name from NAMED_COLORS.
Scenes round-trip through plain dictionaries for JSON storage.

Example:
    >>> from src.tinytracer.scene.model import Material, PointLight, Scene, SceneSphere
    >>> red = Material(diffuse_color="red", kd=1.0)
    >>> scene = Scene(
    ...     spheres=(SceneSphere((0.0, 0.0, 600.0), 200.0, red),),
    ...     lights=(PointLight((0.0, 500.0, 300.0), 1.0),),
    ...     background="gray",
    ... )
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

Color = tuple[float, float, float]
Point = tuple[float, float, float]

NAMED_COLORS: dict[str, Color] = {
    "red": (1.0, 0.0, 0.0),
    "green": (0.0, 1.0, 0.0),
    "blue": (0.0, 0.0, 1.0),
    "yellow": (1.0, 1.0, 0.0),
    "magenta": (1.0, 0.0, 1.0),
    "cyan": (0.0, 1.0, 1.0),
    "white": (1.0, 1.0, 1.0),
    "black": (0.0, 0.0, 0.0),
    "gray": (0.3, 0.3, 0.3),
}


def resolve_color(value: Any) -> Color:
    """Convert a color name or an RGB sequence to an (R, G, B) tuple.

    Raises:
        ValueError: If the name is unknown, the sequence does not have
            three components or a component is negative.
    """
    if isinstance(value, str):
        try:
            return NAMED_COLORS[value.lower()]
        except KeyError:
            raise ValueError(f"Unknown color name: {value}") from None
    rgb = tuple(float(c) for c in value)
    if len(rgb) != 3:
        raise ValueError(f"Color must have 3 components, got {len(rgb)}")
    if any(c < 0.0 for c in rgb):
        raise ValueError(f"Color components must be non-negative, got {rgb}")
    return rgb  # type: ignore[return-value]


def _to_point(value: Any) -> Point:
    point = tuple(float(c) for c in value)
    if len(point) != 3:
        raise ValueError(f"Point must have 3 components, got {len(point)}")
    return point  # type: ignore[return-value]


@dataclass(frozen=True)
class Material:
    """Phong surface material.

    Attributes:
        diffuse_color: Diffuse color (RGB or color name).
        specular_color: Specular color (RGB or color name).
        specular_exponent: Shininess (>= 0).
        refractive_index: Index of refraction (> 0); used only when kt > 0.
        kd: Diffuse coefficient.
        ks: Specular coefficient.
        kr: Reflective coefficient.
        kt: Transmissive coefficient.
    """

    diffuse_color: Color = (1.0, 1.0, 1.0)
    specular_color: Color = (1.0, 1.0, 1.0)
    specular_exponent: float = 50.0
    refractive_index: float = 1.0
    kd: float = 1.0
    ks: float = 0.0
    kr: float = 0.0
    kt: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "diffuse_color", resolve_color(self.diffuse_color))
        object.__setattr__(self, "specular_color", resolve_color(self.specular_color))
        if self.refractive_index <= 0.0:
            raise ValueError(f"Refractive index must be positive, got {self.refractive_index}")
        for name in ("specular_exponent", "kd", "ks", "kr", "kt"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


@dataclass(frozen=True)
class SceneSphere:
    """A sphere with its material.

    Attributes:
        center: Sphere center (x, y, z).
        radius: Sphere radius (> 0).
        material: Surface material.
    """

    center: Point
    radius: float
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _to_point(self.center))
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")


@dataclass(frozen=True)
class PointLight:
    """A point light without distance attenuation.

    Attributes:
        position: Light position (x, y, z).
        intensity: Light intensity (>= 0).
    """

    position: Point
    intensity: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _to_point(self.position))
        if self.intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {self.intensity}")


@dataclass(frozen=True)
class Scene:
    """Read-only scene snapshot.

    Attributes:
        spheres: Spheres in intersection order.
        lights: Point lights.
        background: Color for rays that escape the scene.
    """

    spheres: tuple[SceneSphere, ...] = ()
    lights: tuple[PointLight, ...] = ()
    background: Color = NAMED_COLORS["gray"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "spheres", tuple(self.spheres))
        object.__setattr__(self, "lights", tuple(self.lights))
        object.__setattr__(self, "background", resolve_color(self.background))


# =============================================================================
# Scene Serialization
# =============================================================================


def material_to_dict(material: Material) -> dict[str, Any]:
    """Export a material to a dictionary."""
    return {
        "diffuse_color": list(material.diffuse_color),
        "specular_color": list(material.specular_color),
        "specular_exponent": material.specular_exponent,
        "refractive_index": material.refractive_index,
        "kd": material.kd,
        "ks": material.ks,
        "kr": material.kr,
        "kt": material.kt,
    }


def material_from_dict(data: dict[str, Any]) -> Material:
    """Build a material from a dictionary; missing keys take defaults.

    Raises:
        ValueError: If a key is unknown or a value is invalid.
    """
    try:
        return Material(**data)
    except TypeError as e:
        raise ValueError(f"Invalid material config: {e}") from None


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Export a scene to a dictionary (for JSON serialization)."""
    return {
        "background": list(scene.background),
        "spheres": [
            {
                "center": list(sphere.center),
                "radius": sphere.radius,
                "material": material_to_dict(sphere.material),
            }
            for sphere in scene.spheres
        ],
        "lights": [
            {"position": list(light.position), "intensity": light.intensity}
            for light in scene.lights
        ],
    }


def scene_from_dict(data: dict[str, Any]) -> Scene:
    """Load a scene from a dictionary.

    Args:
        data: Dictionary with 'spheres', 'lights' and 'background' keys.

    Raises:
        ValueError: If the dictionary contains invalid data.
    """
    spheres = []
    for sphere_config in data.get("spheres", []):
        try:
            center = sphere_config["center"]
            radius = sphere_config["radius"]
        except KeyError as e:
            raise ValueError(f"Sphere is missing required key {e}") from None
        material = material_from_dict(sphere_config.get("material", {}))
        spheres.append(SceneSphere(center, float(radius), material))

    lights = []
    for light_config in data.get("lights", []):
        if "position" not in light_config:
            raise ValueError("Light is missing required key 'position'")
        lights.append(
            PointLight(light_config["position"], float(light_config.get("intensity", 1.0)))
        )

    return Scene(
        spheres=tuple(spheres),
        lights=tuple(lights),
        background=data.get("background", NAMED_COLORS["gray"]),
    )


def load_scene_file(filepath: str | Path) -> Scene:
    """Read a scene from a JSON file."""
    with open(filepath, encoding="utf-8") as f:
        return scene_from_dict(json.load(f))


def save_scene_file(scene: Scene, filepath: str | Path) -> None:
    """Write a scene to a JSON file."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(scene_to_dict(scene), f, indent=2)


# =============================================================================
# Default Scene
# =============================================================================

DEFAULT_LIGHT_POSITION = (0.0, 500.0, 300.0)


def default_scene() -> Scene:
    """Create the three-sphere demo scene.

    A red, a green and a blue diffuse sphere in front of the camera, lit by
    one point light, on a gray background.
    """
    return Scene(
        spheres=(
            SceneSphere((0.0, 0.0, 600.0), 200.0, Material(diffuse_color="red")),
            SceneSphere((100.0, 200.0, 800.0), 200.0, Material(diffuse_color="green")),
            SceneSphere((-300.0, -100.0, 700.0), 100.0, Material(diffuse_color="blue")),
        ),
        lights=(PointLight(DEFAULT_LIGHT_POSITION, 1.0),),
        background="gray",
    )
