"""Test helper modules for the monolink test suite.

- cache_utils: cache and logging reset for test isolation
- package_manager: FakePackageManager recording argv instead of running npm
- workspace: builders for package.json trees and config files
"""
from __future__ import annotations
