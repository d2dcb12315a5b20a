from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from .batch import validate_batch_size
from .compression import CompressionLevel, parse_compression_level
from .errors import ConfigError

__all__ = ["DEFAULT_BATCH_SIZE", "BatcherConfig", "load_config", "resolve_config"]

DEFAULT_BATCH_SIZE = 25000

_KNOWN_KEYS = {"batch_size", "compression_level"}


@dataclass(frozen=True)
class BatcherConfig:
    batch_size: int = DEFAULT_BATCH_SIZE
    compression_level: CompressionLevel | None = None


def _parse_config(raw: dict) -> BatcherConfig:
    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}.")

    batch_size = raw.get("batch_size", DEFAULT_BATCH_SIZE)
    validate_batch_size(batch_size)

    level_raw = raw.get("compression_level")
    if level_raw is not None and not isinstance(level_raw, str):
        raise ConfigError("compression_level must be a string (fast, default, best or none).")

    return BatcherConfig(
        batch_size=batch_size,
        compression_level=parse_compression_level(level_raw),
    )


def load_config(config_path: Path) -> BatcherConfig:
    """Read batch settings from a YAML mapping; an empty file yields the defaults."""
    try:
        raw = yaml.safe_load(config_path.read_text())
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse YAML: {exc}") from exc

    if raw is None:
        return BatcherConfig()
    if not isinstance(raw, dict):
        raise ConfigError("Configuration must be a mapping.")
    return _parse_config(raw)


def resolve_config(
    *,
    config_path: Path | None = None,
    batch_size: int | None = None,
    compression_level: str | None = None,
) -> BatcherConfig:
    """Layer explicit values over the config file over the defaults."""
    cfg = load_config(config_path) if config_path is not None else BatcherConfig()
    if batch_size is not None:
        cfg = replace(cfg, batch_size=validate_batch_size(batch_size))
    if compression_level is not None:
        cfg = replace(cfg, compression_level=parse_compression_level(compression_level))
    return cfg
