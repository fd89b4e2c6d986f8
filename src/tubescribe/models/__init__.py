"""Domain models for tubescribe."""
