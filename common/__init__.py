"""Shared context and error definitions."""
