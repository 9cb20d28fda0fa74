"""Shared SVG scene helpers."""
