"""Word vector and common-word storage."""

from .database import WordDatabase, LoadReport, parse_embedding_line

__all__ = ["WordDatabase", "LoadReport", "parse_embedding_line"]
