"""Runtime settings: defaults, optional YAML config file, CLI overrides.

Precedence is defaults < config file < CLI flags. The result is an explicit
:class:`Settings` value handed to the collaborators that need it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

from common.retry import RetryPolicy

logger = logging.getLogger(__name__)

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "exclude_dev": {"type": "boolean"},
        "json": {"type": "boolean"},
        "retry": {
            "type": "object",
            "properties": {
                "max_retries": {"type": "integer", "minimum": 0},
                "delay_sec": {"type": "number", "minimum": 0},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


class ConfigError(Exception):
    """Raised when the configuration file cannot be used."""


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""
    project_path: str
    json_output: bool = False
    exclude_dev: bool = False
    verbose: bool = False
    retry: RetryPolicy = field(default_factory=RetryPolicy)


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load and validate the YAML (or JSON) config file at ``path``.

    Returns an empty mapping when ``path`` is None.

    Raises:
        ConfigError: if the file is missing, unparseable or invalid.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {path}: {exc}") from exc

    if data is None:
        return {}
    errs = sorted(Draft7Validator(CONFIG_SCHEMA).iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        where = "/".join(str(p) for p in first.path) or "<root>"
        raise ConfigError(f"Invalid config at '{where}': {first.message}")
    logger.debug("Loaded config file %s", path)
    return data


def resolve_settings(args) -> Settings:
    """Combine defaults, the config file named by ``args`` and CLI flags."""
    config = load_config_file(getattr(args, "CONFIG", None))
    retry_cfg = config.get("retry", {})
    defaults = RetryPolicy()

    max_retries = retry_cfg.get("max_retries", defaults.max_retries)
    delay_sec = retry_cfg.get("delay_sec", defaults.delay_sec)
    if getattr(args, "RETRIES", None) is not None:
        max_retries = args.RETRIES
    if getattr(args, "RETRY_DELAY", None) is not None:
        delay_sec = args.RETRY_DELAY
    if max_retries < 0 or delay_sec < 0:
        raise ConfigError("Retry count and delay must not be negative")

    def _flag(cli_name: str, config_key: str) -> bool:
        cli_value = getattr(args, cli_name, None)
        if cli_value is not None:
            return bool(cli_value)
        return bool(config.get(config_key, False))

    return Settings(
        project_path=getattr(args, "PROJECT_PATH", None) or os.getcwd(),
        json_output=_flag("JSON", "json"),
        exclude_dev=_flag("NO_DEV", "exclude_dev"),
        verbose=bool(getattr(args, "VERBOSE", False)),
        retry=RetryPolicy(max_retries=max_retries, delay_sec=delay_sec),
    )
