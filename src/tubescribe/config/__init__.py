"""Configuration package for tubescribe."""
