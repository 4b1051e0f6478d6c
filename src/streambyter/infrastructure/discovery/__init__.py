"""Target discovery."""

from .path_finder import PathFinder

__all__ = ["PathFinder"]
