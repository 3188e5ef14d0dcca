"""API route modules."""

from . import fit, metrics, tags

__all__ = ["fit", "metrics", "tags"]
