"""Taxonomy naming, slugs and persistence for a blogging platform."""

__version__ = "0.1.0"
