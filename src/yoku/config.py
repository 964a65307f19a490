"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILE_NAME = "yoku.toml"
APP_DIR_NAME = "yoku"
STATE_DIR_NAME = ".yoku"
DEFAULT_EXTENSION = ".md"


@dataclass(slots=True, frozen=True)
class StorageConfig:
    """How list files are named and bootstrapped."""

    extension: str = DEFAULT_EXTENSION
    create_starter_file: bool = True


@dataclass(slots=True, frozen=True)
class AuditConfig:
    """Audit log toggle and location."""

    enabled: bool
    path: Path


@dataclass(slots=True, frozen=True)
class AppConfig:
    """Fully merged application configuration."""

    data_dir: Path
    storage: StorageConfig
    audit: AuditConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "data_dir": str(self.data_dir),
            "storage": {
                "extension": self.storage.extension,
                "create_starter_file": self.storage.create_starter_file,
            },
            "audit": {
                "enabled": self.audit.enabled,
                "path": str(self.audit.path),
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    audit_enabled: bool | None = None


def default_data_dir() -> Path:
    """Return the platform data directory for list files."""
    xdg = os.environ.get("XDG_DATA_HOME", "").strip()
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    home = Path.home()
    share = home / ".local" / "share"
    if share.is_dir():
        return share / APP_DIR_NAME
    return home / APP_DIR_NAME


def default_config(data_dir: Path) -> AppConfig:
    """Build default config for a given data directory."""
    resolved = data_dir.resolve()
    return AppConfig(
        data_dir=resolved,
        storage=StorageConfig(),
        audit=AuditConfig(enabled=True, path=resolved / STATE_DIR_NAME / "audit.jsonl"),
    )


def load_config_file(data_dir: Path) -> dict[str, object]:
    """Load optional yoku.toml from the data directory."""
    config_path = data_dir / CONFIG_FILE_NAME
    if not config_path.is_file():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def merge_config(base: AppConfig, payload: dict[str, object], overrides: CliOverrides) -> AppConfig:
    """Merge defaults, the config file, then CLI overrides."""
    storage_payload = _get_table(payload, "storage")
    audit_payload = _get_table(payload, "audit")

    extension = base.storage.extension
    if "extension" in storage_payload:
        raw_extension = storage_payload["extension"]
        if (
            not isinstance(raw_extension, str)
            or len(raw_extension) < 2
            or not raw_extension.startswith(".")
            or "/" in raw_extension
            or "\\" in raw_extension
        ):
            raise ValueError(
                "Config field 'storage.extension' must be a string starting with '.'."
            )
        extension = raw_extension

    create_starter_file = _optional_bool(
        storage_payload.get("create_starter_file"),
        "storage.create_starter_file",
        base.storage.create_starter_file,
    )
    audit_enabled = _optional_bool(
        audit_payload.get("enabled"), "audit.enabled", base.audit.enabled
    )

    audit_path = base.audit.path
    if "path" in audit_payload:
        raw_path = audit_payload["path"]
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError("Config field 'audit.path' must be a non-empty string.")
        candidate = Path(raw_path).expanduser()
        audit_path = candidate if candidate.is_absolute() else base.data_dir / candidate

    merged = AppConfig(
        data_dir=base.data_dir,
        storage=StorageConfig(extension=extension, create_starter_file=create_starter_file),
        audit=AuditConfig(enabled=audit_enabled, path=audit_path),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: AppConfig, overrides: CliOverrides) -> AppConfig:
    """Apply startup overrides at highest precedence."""
    enabled = (
        overrides.audit_enabled
        if overrides.audit_enabled is not None
        else config.audit.enabled
    )
    return AppConfig(
        data_dir=config.data_dir,
        storage=config.storage,
        audit=AuditConfig(enabled=enabled, path=config.audit.path.resolve()),
    )


def load_effective_config(
    data_dir: Path | None = None, overrides: CliOverrides | None = None
) -> AppConfig:
    """Load effective config using merge order defaults -> yoku.toml -> overrides."""
    effective_overrides = overrides or CliOverrides()
    chosen = effective_overrides.data_dir or data_dir or default_data_dir()
    resolved = chosen.expanduser().resolve()
    base = default_config(resolved)
    payload = load_config_file(resolved)
    return merge_config(base, payload, effective_overrides)
