"""Workflow coordination package."""
