"""Bundled resources (default configuration)."""
