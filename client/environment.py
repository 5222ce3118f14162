from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

import yaml

from shared.log import get_logger

logger = get_logger(__name__)


class Environment(str, Enum):
    """Deployment the client talks to; each one has a fixed base URL."""

    DEV = "dev"
    QA = "qa"
    PROD = "prod"

    @property
    def base_url(self) -> str:
        return _BASE_URLS[self]

    @classmethod
    def from_string(cls, value: str) -> Environment:
        """Convert string to Environment, raise ValueError if unknown."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown environment: {value}")

    @classmethod
    def default(cls) -> Environment:
        """WIRESTREAM_ENV if set, else dev during development and prod otherwise."""
        selected = os.getenv("WIRESTREAM_ENV")
        if selected:
            return cls.from_string(selected)
        if os.getenv("PYTHON_ENV", "").lower() in ("dev", "development") or "pytest" in sys.modules:
            return cls.DEV
        return cls.PROD


_BASE_URLS: Dict[Environment, str] = {
    Environment.DEV: "wss://dev.example.com/ws",
    Environment.QA: "wss://qa.example.com/ws",
    Environment.PROD: "wss://prod.example.com/ws",
}


def default_config_path() -> Path:
    """Return path to the environments YAML file."""
    return Path(os.getenv("WIRESTREAM_CONFIG", Path.home() / ".wirestream" / "environments.yaml"))


def load_environment_overrides(path: Optional[Path] = None) -> Dict[Environment, str]:
    """
    Load per-environment base URL overrides from YAML:

        environments:
          dev:
            base_url: ws://localhost:8765/ws

    Returns an empty mapping when the file is missing. Unknown environment
    names and entries without a string base_url are skipped.
    """
    path = path or default_config_path()
    if not path.exists():
        logger.debug("No environments file at %s; using built-in URLs", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    entries = data.get("environments", {}) if isinstance(data, dict) else {}
    if not isinstance(entries, dict):
        logger.warning("Ignoring malformed 'environments' section in %s", path)
        return {}

    result: Dict[Environment, str] = {}
    for name, entry in entries.items():
        try:
            env = Environment.from_string(str(name))
        except ValueError:
            logger.warning("Ignoring unknown environment %r in %s", name, path)
            continue
        base_url = entry.get("base_url") if isinstance(entry, dict) else None
        if isinstance(base_url, str) and base_url:
            result[env] = base_url
    return result


def resolve_url(environment: Environment, overrides: Optional[Dict[Environment, str]] = None) -> str:
    """Target address for environment, preferring a configured override."""
    if overrides and environment in overrides:
        return overrides[environment]
    return environment.base_url
