"""Minimal line-oriented substring search."""
