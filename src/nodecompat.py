"""nodecompat - Node.js engine range calculator.

Reads the project's package.json and every installed dependency's
package.json, intersects their ``engines.node`` ranges and reports the
resulting range, or a conflict when no Node.js version satisfies them all.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from constants import Constants, ExitCodes
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import ConfigError, Settings, resolve_settings
from manifest.reader import (
    ManifestError,
    engine_constraint,
    get_dependencies,
    read_dependency_manifest,
    read_root_manifest,
)
from reporting import exit_code, render_json, render_text
from versioning.aggregator import Aggregator
from versioning.models import AggregationResult, AggregationStep

logger = logging.getLogger(__name__)


def _log_step(step: AggregationStep) -> None:
    logger.info(
        "Processed %s: node %s -> min %s, max %s",
        step.name,
        step.raw,
        step.interval.lower.value,
        step.interval.upper.value,
    )


def calculate_compatibility(settings: Settings) -> AggregationResult:
    """Aggregate the engine ranges of the project and its dependencies.

    Raises:
        ManifestError: if the project's own package.json is unusable.
    """
    root_path = os.path.join(settings.project_path, Constants.PACKAGE_JSON_FILE)
    pkg = read_root_manifest(root_path, settings.retry)

    aggregator = Aggregator()
    project_range = engine_constraint(pkg)
    if project_range is not None:
        step = aggregator.add(Constants.ROOT_PARTICIPANT, project_range)
        if settings.verbose:
            _log_step(step)

    deps = get_dependencies(pkg, exclude_dev=settings.exclude_dev)
    if is_debug_enabled(logger):
        logger.debug(
            "Collected dependencies",
            extra=extra_context(
                event="decision",
                component="cli",
                action="get_dependencies",
                count=len(deps),
                exclude_dev=settings.exclude_dev,
            ),
        )

    for name in deps:
        dep_pkg = read_dependency_manifest(name, settings.project_path, settings.retry)
        dep_range = engine_constraint(dep_pkg)
        if dep_range is None:
            continue
        step = aggregator.add(name, dep_range)
        if settings.verbose:
            _log_step(step)

    return aggregator.result()


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)

    try:
        settings = resolve_settings(args)
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(ExitCodes.FILE_ERROR.value)

    try:
        result = calculate_compatibility(settings)
    except ManifestError as exc:
        logger.error("%s", exc)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if settings.json_output:
        print(render_json(result))
    else:
        render_text(result)
    sys.exit(exit_code(result))


if __name__ == "__main__":
    main()
