"""Raycasting maze viewer: reads, checks and renders .cub scene files."""

__version__ = "0.1.0"