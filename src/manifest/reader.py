"""package.json reading for the project root and its installed dependencies."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled
from common.retry import NO_RETRY, RetryPolicy, with_retries

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when the root package.json cannot be used."""


@dataclass(frozen=True)
class DependencyRef:
    """A dependency declared by the root manifest."""
    name: str
    spec: Any
    dev: bool = False


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _load(path: str, retry: RetryPolicy, operation_name: str) -> Any:
    with Timer() as t:
        data = with_retries(lambda: _read_json(path), retry, operation_name)
    if is_debug_enabled(logger):
        logger.debug(
            "Manifest read",
            extra=extra_context(
                event="file_read",
                component="manifest_reader",
                action="read",
                outcome="success",
                target=path,
                duration_ms=t.duration_ms(),
            ),
        )
    return data


def read_root_manifest(path: str, retry: RetryPolicy = NO_RETRY) -> Dict[str, Any]:
    """Read and parse the project's package.json.

    Raises:
        ManifestError: if the file is missing, unreadable, not JSON or not
            a JSON object.
    """
    try:
        data = _load(path, retry, f"read {path}")
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Failed to read or parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Failed to read or parse {path}: not a JSON object")
    return data


def get_dependencies(pkg: Dict[str, Any], exclude_dev: bool = False) -> Dict[str, DependencyRef]:
    """Merge ``dependencies`` and, unless excluded, ``devDependencies``.

    A name declared in both sections is reported as a dev dependency.

    Raises:
        TypeError: if ``pkg`` is not a dict.
    """
    if not isinstance(pkg, dict):
        raise TypeError("pkg must be a dict")

    deps: Dict[str, DependencyRef] = {}
    runtime = pkg.get("dependencies")
    if isinstance(runtime, dict):
        for name, spec in runtime.items():
            deps[name] = DependencyRef(name, spec, dev=False)
    if exclude_dev:
        return deps
    dev = pkg.get("devDependencies")
    if isinstance(dev, dict):
        for name, spec in dev.items():
            deps[name] = DependencyRef(name, spec, dev=True)
    return deps


def dependency_manifest_path(name: str, project_path: str) -> str:
    """Location of an installed dependency's package.json (scoped names included)."""
    return os.path.join(
        project_path, Constants.NODE_MODULES_DIR, *name.split("/"), Constants.PACKAGE_JSON_FILE
    )


def read_dependency_manifest(
    name: str, project_path: str, retry: RetryPolicy = NO_RETRY
) -> Optional[Dict[str, Any]]:
    """Read an installed dependency's package.json, or None when unusable."""
    path = dependency_manifest_path(name, project_path)
    try:
        data = _load(path, retry, f"read {name} manifest")
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Could not read package.json for %s (%s): %s", name, path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring package.json for %s (%s): not a JSON object", name, path)
        return None
    return data


def engine_constraint(pkg: Optional[Dict[str, Any]], engine: str = Constants.ENGINE_NAME) -> Optional[str]:
    """The declared ``engines.<engine>`` range, or None when absent."""
    if not isinstance(pkg, dict):
        return None
    engines = pkg.get("engines")
    if not isinstance(engines, dict):
        return None
    value = engines.get(engine)
    return value if isinstance(value, str) else None
