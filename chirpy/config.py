"""Configuration management for the Chirpy service."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml

from .database import resolve_database_path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def _split_tokens(raw: object) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = [str(item) for item in raw]
    else:
        raise ValueError("admin_tokens must be a list or a comma separated string")
    return tuple(item.strip() for item in items if item.strip())


def _parse_port(raw: object) -> int:
    try:
        port = int(str(raw).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid port: {raw!r}") from exc
    if not 1 <= port <= 65535:
        raise ValueError(f"Port out of range: {port}")
    return port


def _resolve_dir(raw: object, base_path: Path) -> Path:
    candidate = Path(str(raw)).expanduser()
    if not candidate.is_absolute():
        candidate = base_path / candidate
    return candidate.resolve(strict=False)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for one Chirpy process."""

    database_path: Path
    public_dir: Path
    assets_dir: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    admin_tokens: Tuple[str, ...] = ()

    @staticmethod
    def defaults() -> "Settings":
        return Settings(
            database_path=resolve_database_path(None),
            public_dir=(_PROJECT_ROOT / "public").resolve(strict=False),
            assets_dir=(_PROJECT_ROOT / "assets").resolve(strict=False),
        )

    @staticmethod
    def from_dict(data: Mapping[str, object], base_path: Path | None = None) -> "Settings":
        """Create :class:`Settings` from raw dictionary data, filling in defaults."""

        base = base_path or _PROJECT_ROOT
        unknown = set(data.keys()) - {
            "database_path",
            "public_dir",
            "assets_dir",
            "host",
            "port",
            "admin_tokens",
        }
        if unknown:
            raise ValueError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")

        settings = Settings.defaults()
        updates: Dict[str, object] = {}
        if data.get("database_path"):
            raw_db = str(data["database_path"])
            if "://" in raw_db:
                updates["database_path"] = resolve_database_path(raw_db)
            else:
                updates["database_path"] = _resolve_dir(raw_db, base)
        if data.get("public_dir"):
            updates["public_dir"] = _resolve_dir(data["public_dir"], base)
        if data.get("assets_dir"):
            updates["assets_dir"] = _resolve_dir(data["assets_dir"], base)
        if data.get("host"):
            updates["host"] = str(data["host"]).strip()
        if data.get("port") is not None:
            updates["port"] = _parse_port(data["port"])
        if "admin_tokens" in data:
            updates["admin_tokens"] = _split_tokens(data["admin_tokens"])
        return replace(settings, **updates)


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the optional YAML configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (_PROJECT_ROOT / "config" / "chirpy.yaml").resolve(strict=False)
    return candidate


def _load_yaml(config_path: Path) -> Dict[str, object]:
    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")
    return raw


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from an optional YAML file, then apply environment overrides."""

    env = os.environ if environ is None else environ
    path = config_path or resolve_config_path(env.get("CHIRPY_CONFIG"))

    if path.is_file():
        settings = Settings.from_dict(_load_yaml(path), base_path=path.parent)
    elif config_path is not None:
        raise ValueError(f"Configuration file not found: {config_path}")
    else:
        settings = Settings.defaults()

    updates: Dict[str, object] = {}
    if env.get("DB_URL"):
        updates["database_path"] = resolve_database_path(env["DB_URL"])
    if env.get("CHIRPY_PUBLIC_DIR"):
        updates["public_dir"] = Path(env["CHIRPY_PUBLIC_DIR"]).expanduser().resolve(strict=False)
    if env.get("CHIRPY_ASSETS_DIR"):
        updates["assets_dir"] = Path(env["CHIRPY_ASSETS_DIR"]).expanduser().resolve(strict=False)
    if env.get("CHIRPY_HOST"):
        updates["host"] = env["CHIRPY_HOST"].strip()
    if env.get("CHIRPY_PORT"):
        updates["port"] = _parse_port(env["CHIRPY_PORT"])
    if "CHIRPY_ADMIN_TOKENS" in env:
        updates["admin_tokens"] = _split_tokens(env["CHIRPY_ADMIN_TOKENS"])

    return replace(settings, **updates)


__all__ = ["Settings", "load_settings", "resolve_config_path", "DEFAULT_HOST", "DEFAULT_PORT"]
