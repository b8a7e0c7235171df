"""Textured raycasting maze viewer: scene parsing, XPM textures, rendering and a pygame front end."""

__version__ = "0.1.0"