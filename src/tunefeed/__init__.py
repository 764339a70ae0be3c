"""Tunefeed - Podcasting 2.0 feed codec for music albums and publisher catalogs."""

__version__ = "0.1.0"
