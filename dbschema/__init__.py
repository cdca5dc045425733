"""Discover, describe and write PostgreSQL schemas, with a small SQL tokenizer and probe."""

__version__ = "0.1.0"