"""Admin backend: per-store statistics and category management."""

__version__ = "0.1.0"
