"""
monolink configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from monolink.core.exceptions import ConfigError
from monolink.core.schemas import SchemaValidationError, validate_payload
from monolink.core.utils.io import iter_yaml_files, read_yaml
from monolink.core.utils.merge import deep_merge as _deep_merge
from monolink.core.utils.paths import (
    USER_CONFIG_ENV,
    get_project_config_dir,
    get_user_config_dir,
)
from monolink.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "MONOLINK_"
CONFIG_SCHEMA = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate monolink configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: MONOLINK_<section>__<key>
    2. Project config: <repo-root>/.monolink/config/*.yaml (alphabetical order)
    3. User config: <user-config-dir>/config/*.yaml (alphabetical order)
    4. Bundled defaults: monolink.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()

        # Bundled defaults from monolink.data package (always available)
        self.core_config_dir = get_data_path("config")
        # User-specific config overlays (e.g. ~/.monolink/config)
        self.user_config_dir = get_user_config_dir() / "config"
        # Project-specific config overrides
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            raise ConfigError(
                f"Invalid configuration file {path}: {exc}", context={"path": str(path)}
            ) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration file {path} must contain a mapping",
                context={"path": str(path)},
            )
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            logger.debug("Loading config layer %s", path)
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[Union[str, int]]:
        processed: List[Union[str, int]] = []
        for seg in raw.split("__"):
            if seg == "":
                if strict:
                    raise ConfigError(
                        f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                        context={"key": f"{ENV_PREFIX}{raw}"},
                    )
                return []
            if seg.isdigit():
                processed.append(int(seg))
            else:
                # Lowercase here; _set_nested matches existing keys case-insensitively.
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[Union[str, int]], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == USER_CONFIG_ENV:
                continue
            raw = key[len(ENV_PREFIX):]
            if "__" not in raw:
                continue
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, int]], value: Any) -> None:
        cur: Any = root
        for i, part in enumerate(path):
            is_last = i == len(path) - 1
            if isinstance(part, int):
                if not isinstance(cur, list):
                    raise ConfigError("Index assignment requires list")
                while len(cur) <= part:
                    cur.append(None)
                if is_last:
                    cur[part] = value
                    return
                if not isinstance(cur[part], dict):
                    cur[part] = {}
                cur = cur[part]
                continue
            if not isinstance(cur, dict):
                raise ConfigError("Path traverses non-dict container")
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            use_key = lower_map.get(part, part)
            if is_last:
                cur[use_key] = value
                return
            nxt = path[i + 1]
            if use_key not in cur or not isinstance(cur[use_key], (dict, list)):
                cur[use_key] = [] if isinstance(nxt, int) else {}
            cur = cur[use_key]

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value in self._iter_env_overrides(strict=strict):
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def validate_schema(self, config: Dict[str, Any]) -> None:
        try:
            validate_payload(config, CONFIG_SCHEMA)
        except SchemaValidationError as exc:
            raise ConfigError(str(exc), context={"repo_root": str(self.repo_root)}) from exc

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from every layer (UNCACHED)."""
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.user_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg, strict=validate)

        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration, served from the shared cache."""
        from .cache import get_cached_config

        return get_cached_config(repo_root=self.repo_root, validate=validate)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a dotted-path value (e.g. ``link.packageManager``)."""
        node: Any = self.load_config()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node


__all__ = ["ConfigManager", "ENV_PREFIX", "CONFIG_SCHEMA"]
