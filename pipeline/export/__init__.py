from .markdown import render_markdown, slugify

__all__ = [
    "render_markdown",
    "slugify",
]
