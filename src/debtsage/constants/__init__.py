"""Shared enumerations and limits."""
