"""monolink config commands."""
