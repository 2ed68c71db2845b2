"""Vectors, matrices, least squares and Harris/difference-of-Gaussians feature detectors."""

__version__ = "0.1.0"
__all__ = ["vec2", "vec3", "vec4", "mat2", "mat3", "mat4", "lstsq", "detector", "harris", "dog"]