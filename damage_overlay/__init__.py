"""Damage overlay layout and rendering."""
