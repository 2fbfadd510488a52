"""Whitted-style ray tracer for spheres under point lights, built on Taichi.

This package renders static sphere scenes with recursive ray tracing:
- Closed-form ray-sphere intersection with nearest-hit resolution
- Phong diffuse and specular shading with hard shadows
- Mirror reflection and Snell's-law refraction up to a bounded depth

Subpackages:
    core: Vector utilities, local shading and the ray tracing integrator
    geometry: Sphere primitive and intersection test
    materials: Phong material model and registry
    scene: Scene description, storage and nearest-hit queries
    camera: Pinhole camera with primary ray generation
    output: Image export (PPM, PNG)
"""

__version__ = "0.1.0"
