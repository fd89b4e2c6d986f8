"""Utility helpers shared across tubescribe modules."""
