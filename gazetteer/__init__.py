"""Bundled municipality gazetteer data."""
