"""Mesh sources for geometry that does not come from a live CAD host."""
