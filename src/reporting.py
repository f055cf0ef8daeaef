"""Result rendering for the CLI: human messages, JSON report and exit code.

The JSON report is validated against ``REPORT_SCHEMA`` (JSON Schema
Draft 7) before it is emitted.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from jsonschema import Draft7Validator

from constants import ExitCodes
from versioning.models import AggregationResult

logger = logging.getLogger(__name__)

REPORT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["globalMin", "globalMax", "conflict", "message", "malformed"],
    "properties": {
        "globalMin": {"type": ["string", "null"]},
        "globalMax": {"type": ["string", "null"]},
        "globalMaxInclusive": {"type": "boolean"},
        "conflict": {"type": "boolean"},
        "message": {"type": "string"},
        "malformed": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}


class SchemaError(ValueError):
    """Raised when a report fails to validate against its schema."""


def validate_report(report: Dict[str, Any]) -> None:
    """Strictly validate ``report``; raise SchemaError on the first problem."""
    validator = Draft7Validator(REPORT_SCHEMA)
    errs = sorted(validator.iter_errors(report), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise SchemaError(f"Invalid report at '{path}': {first.message}")


def summary_message(result: AggregationResult) -> str:
    """One-line description of the aggregated range."""
    lo, hi = result.global_min, result.global_max
    if result.conflict:
        if lo == hi:
            return f"Version conflict: the ranges only meet at {lo}, which one of them excludes."
        return f"Version conflict: calculated min ({lo}) is greater than max ({hi})."
    if lo and hi:
        return f"Determined Node.js version range: {lo} - {hi}"
    if lo:
        return f"Determined minimum Node.js version: {lo}"
    if hi:
        kind = "inclusive" if result.global_upper.inclusive else "exclusive"
        return f"Determined maximum Node.js version ({kind}): {hi}"
    return "No specific Node.js engine constraints found."


def build_report(result: AggregationResult) -> Dict[str, Any]:
    """Structured report handed to ``--json`` output."""
    report = {
        "globalMin": result.global_min,
        "globalMax": result.global_max,
        "globalMaxInclusive": result.global_upper.inclusive,
        "conflict": result.conflict,
        "message": summary_message(result),
        "malformed": list(result.malformed),
    }
    validate_report(report)
    return report


def render_json(result: AggregationResult) -> str:
    return json.dumps(build_report(result), indent=2)


def render_text(result: AggregationResult) -> None:
    """Log the summary at a level matching the outcome."""
    message = summary_message(result)
    if result.conflict:
        logger.error(message)
        for step in result.steps:
            if step.raw is not None:
                logger.error("  %s requires %s (%s)", step.name, step.raw, step.interval)
    elif result.global_min is None and result.global_max is None:
        logger.warning(message)
    else:
        logger.info(message)
    for name in result.malformed:
        logger.warning("Ignored malformed engine range declared by %s", name)


def exit_code(result: AggregationResult) -> int:
    """Non-zero exactly when the participants conflict."""
    return ExitCodes.CONFLICT.value if result.conflict else ExitCodes.SUCCESS.value
