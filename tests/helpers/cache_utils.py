"""Cache utilities for test isolation."""
from __future__ import annotations


def reset_monolink_caches() -> None:
    """Reset module-level caches and logging handlers between tests."""
    from monolink.core.config.cache import clear_all_caches
    from monolink.core.logging import reset_logging_for_tests

    clear_all_caches()
    reset_logging_for_tests()
