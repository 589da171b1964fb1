"""Presentation layer: host framework integrations."""
