"""Utility helpers for material_browser."""
