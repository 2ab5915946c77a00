"""Template resolution, substitution and tree traversal."""

from .engine import render_page, render_text
from .walker import build_site

__all__ = ["build_site", "render_page", "render_text"]
