"""In-memory YouTube transcript index with substring search."""

__version__ = "0.1.0"
