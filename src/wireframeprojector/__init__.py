"""Animated wireframe renderer for axis-aligned cuboids with user-defined projections."""

__version__ = "0.1.0"
