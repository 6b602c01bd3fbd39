"""Simulated zone-based memory allocator with tracing, reporting and text helpers."""

__version__ = "0.1.0"

__all__ = ["allocator", "colors", "debug", "numfmt", "output", "show", "strutil"]