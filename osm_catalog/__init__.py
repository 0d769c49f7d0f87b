"""Geofabrik map extract catalog builder."""
