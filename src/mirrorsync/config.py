"""
Pair list loading.

The config file is a JSON array of objects with "name", "originalPath"
and "targetPath". A .yaml/.yml file with the same list is accepted too.
Any failure here is a ConfigError and no pair is processed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter, ValidationError

from . import DEFAULT_CONFIG_PATH
from .errors import ConfigError
from .models import SyncPairSpec

logger = logging.getLogger("mirrorsync.config")

YAML_SUFFIXES = (".yaml", ".yml")

_PAIRS = TypeAdapter(list[SyncPairSpec])


def parse_pairs(data: Any) -> list[SyncPairSpec]:
    """Validate already-decoded config data.

    Args:
        data: Decoded JSON/YAML document.

    Returns:
        list[SyncPairSpec]: Pairs in file order.

    Raises:
        ConfigError: If the document is not a list of pair objects.
    """
    if not isinstance(data, list):
        raise ConfigError(
            f"Config must be a list of pairs, got {type(data).__name__}"
        )
    try:
        return _PAIRS.validate_python(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid pair definition: {exc}") from exc


def load_pairs(path: Path | str | None = None) -> list[SyncPairSpec]:
    """Read and validate the pair list from disk.

    Args:
        path: Config file. Defaults to $MIRRORSYNC_CONFIG or ./config.

    Returns:
        list[SyncPairSpec]: Pairs in file order. May be empty.

    Raises:
        ConfigError: If the file is missing, unreadable or malformed.
    """
    config_path = Path(path or DEFAULT_CONFIG_PATH).expanduser()
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {config_path}: {exc}", path=config_path) from exc

    try:
        if config_path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot parse config {config_path}: {exc}", path=config_path) from exc

    pairs = parse_pairs(data)
    logger.info("Loaded %d pair(s) from %s", len(pairs), config_path)
    return pairs
