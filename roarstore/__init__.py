"""Roaring bitmap containers, set operations over them, and the portable serialization format."""

__version__ = "0.1.0"