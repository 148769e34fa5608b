"""Top-level monolink commands (auto-discovered)."""
