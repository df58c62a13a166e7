"""Geometry, items, bins and layout validation."""
