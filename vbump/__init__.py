"""Semantic version bumping for mobile app releases."""

__version__ = "0.1.0"
