"""Helpers that shape Kelp parser output into language-server responses."""

__version__ = "0.1.0"
__all__ = ["features", "line_index", "messages"]