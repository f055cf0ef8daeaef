"""Argument parsing functionality for nodecompat."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="nodecompat",
        description=(
            "nodecompat - Node.js engine range calculator for a project and its dependencies"
        ),
        add_help=True,
    )

    parser.add_argument("-V", "--version",
                        action="version",
                        version=f"%(prog)s {Constants.VERSION}")
    parser.add_argument("-p", "--project-path",
                        dest="PROJECT_PATH",
                        help="Path to the project directory (default: current directory)",
                        action="store",
                        type=str)
    parser.add_argument("--json",
                        dest="JSON",
                        help="Output results in JSON format",
                        action="store_true",
                        default=None)
    parser.add_argument("--no-dev",
                        dest="NO_DEV",
                        help="Exclude devDependencies from analysis",
                        action="store_true",
                        default=None)
    parser.add_argument("-v", "--verbose",
                        dest="VERBOSE",
                        help="Log every processed dependency",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--retries",
                        dest="RETRIES",
                        help="Retries for each manifest read",
                        action="store",
                        type=int)
    parser.add_argument("--retry-delay",
                        dest="RETRY_DELAY",
                        help="Seconds to wait between manifest read retries",
                        action="store",
                        type=float)

    return parser.parse_args(argv)
