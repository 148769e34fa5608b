"""Shared utilities for monolink core modules."""
