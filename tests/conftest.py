import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'monolink' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_monolink_caches


@pytest.fixture(autouse=True)
def isolated_monolink_env(tmp_path_factory, monkeypatch):
    """Keep user config and MONOLINK_* variables from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("MONOLINK_"):
            monkeypatch.delenv(key, raising=False)
    user_dir = tmp_path_factory.mktemp("user-config")
    monkeypatch.setenv("MONOLINK_USER_CONFIG_DIR", str(user_dir))
    reset_monolink_caches()
    yield user_dir
    reset_monolink_caches()
