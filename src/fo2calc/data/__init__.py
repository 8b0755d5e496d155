"""Packaged mod registry and JSON schemas."""
