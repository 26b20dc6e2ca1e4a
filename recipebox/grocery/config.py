"""TOML configuration loader for the grocery module."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

_DEFAULT_ENDPOINT = "http://localhost:3000/api/parse-recipe"
_DEFAULT_DB_PATH = "~/.config/recipebox/recipes.db"


@dataclass
class ClaudeCleanupConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GeminiCleanupConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"


@dataclass
class CleanupConfig:
    backend: str = "http"
    endpoint: str = _DEFAULT_ENDPOINT
    timeout: float = 60.0
    claude: ClaudeCleanupConfig = field(default_factory=ClaudeCleanupConfig)
    gemini: GeminiCleanupConfig = field(default_factory=GeminiCleanupConfig)


@dataclass
class DatabaseConfig:
    path: str = _DEFAULT_DB_PATH


@dataclass
class GroceryConfig:
    cleanup: CleanupConfig = field(default_factory=CleanupConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def load_config(path: str | Path | None = None) -> GroceryConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys and the cleanup endpoint can be supplied via environment
    variables when the file leaves them empty.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cln = raw.get("cleanup", {})
    dbs = raw.get("database", {})

    claude_cfg = cln.get("claude", {})
    gemini_cfg = cln.get("gemini", {})

    # Resolve secrets: config file → environment variable
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )
    endpoint = (
        cln.get("endpoint", "")
        or os.environ.get("RECIPEBOX_CLEANUP_ENDPOINT", "")
        or _DEFAULT_ENDPOINT
    )

    return GroceryConfig(
        cleanup=CleanupConfig(
            backend=cln.get("backend", "http"),
            endpoint=endpoint,
            timeout=float(cln.get("timeout", 60.0)),
            claude=ClaudeCleanupConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
            gemini=GeminiCleanupConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.0-flash"),
            ),
        ),
        database=DatabaseConfig(
            path=dbs.get("path", _DEFAULT_DB_PATH),
        ),
    )
