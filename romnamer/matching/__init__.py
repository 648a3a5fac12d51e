"""Checksum matching package."""
