"""HTML page rendering."""

from .pages import DependencyLink, PageRenderer

__all__ = ["DependencyLink", "PageRenderer"]
