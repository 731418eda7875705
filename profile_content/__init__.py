"""Homepage content normalizer for Notion-style databases."""

__version__ = "0.1.0"
