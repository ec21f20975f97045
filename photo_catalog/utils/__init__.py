"""Shared helpers that do not belong to a single feature."""
