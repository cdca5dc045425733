"""PostgreSQL schema types, definitions, queries, parsing, discovery and writing."""

__all__ = ["definitions", "discovery", "parsing", "queries", "types", "writer"]