"""Whitted-style ray caster built on Taichi.

This package renders a static scene of spheres and planes lit by ambient,
directional and spot lights. One ray is cast per pixel and traced through
mirror reflection and glass refraction up to a fixed depth, with opaque
surfaces shaded by ambient + Lambertian diffuse + Phong specular terms and a
checkerboard pattern on planes.

Subpackages:
    core: Ray struct, vector helpers and the depth-bounded tracer
    geometry: Sphere and plane primitives with intersection tests
    lights: Directional and spot light storage and per-point light queries
    materials: Standard (local shading), mirror and glass surface responses
    scene: Primitive storage, nearest-hit queries, scene model and loader
    camera: Viewport and primary ray generation
    preview: Pixel buffer encoding and PNG export

Modules:
    batch: Batch driver and command line entry point
    errors: Scene configuration exceptions
"""

__version__ = "0.1.0"
