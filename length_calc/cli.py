"""
Command line helpers for length calculator configuration files.

Usage:
    length-calc init-config [PATH]
    length-calc show-config [-c CONFIG] [--document MODEL_PATH]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from length_calc.logging_config import configure_default_logging
from length_calc.project_config import (
    CONFIG_FILENAME,
    apply_logging_config,
    create_sample_config,
    load_config,
)
from length_calc.units import format_in_project_units

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="length-calc",
        description="Manage length calculator configuration files.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-config", help="Write a sample configuration file")
    init_parser.add_argument(
        "path",
        nargs="?",
        default=CONFIG_FILENAME,
        help=f"Output path (default: {CONFIG_FILENAME})",
    )
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite an existing file",
    )

    show_parser = subparsers.add_parser("show-config", help="Print the effective configuration")
    show_parser.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="Explicit configuration file",
    )
    show_parser.add_argument(
        "--document",
        default=None,
        help="Model document path; its directory is searched for a configuration file",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    if args.command == "init-config":
        configure_default_logging(verbose=args.verbose)
        target = Path(args.path)
        if target.exists() and not args.force:
            logger.error("%s already exists (use --force to overwrite)", target)
            return 1
        create_sample_config(target)
        return 0

    config = load_config(document_path=args.document, explicit_config=args.config_path)
    apply_logging_config(config, verbose=args.verbose)
    _, symbol = format_in_project_units(1.0, config.units)
    print(config.to_json())
    print(f"Lengths will be shown in: {symbol}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
