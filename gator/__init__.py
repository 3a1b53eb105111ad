"""Command-line RSS feed aggregator with users and feeds kept in SQLite."""

__version__ = "0.1.0"
__all__ = ["__version__"]