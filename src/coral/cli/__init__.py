"""Coral CLI."""
