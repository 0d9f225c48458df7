#!/usr/bin/env python3
"""
CLI for the SonarQube Team Build pre-processor.

Modes:
  1) ruleset  - write an analyzer rule-set file (explicit ids or a project's quality profile)
  2) coverage - list (or download) the code coverage reports of a TFS build
  3) download - fetch one URL with the configured credentials
  4) summary  - add messages to the build summary

Usage:
  python teambuild_cli.py --mode ruleset --output SonarQube.ruleset --rule-id CA1000 --rule-id CA1001
  python teambuild_cli.py --mode ruleset --output SonarQube.ruleset --project-key my_project
  python teambuild_cli.py --mode coverage --output-dir .sonarqube/coverage
  python teambuild_cli.py --mode summary --message "Analysis results: http://sonar/dashboard?id=my_project"

Settings are read from the environment; a .env file at the repo root is loaded
first (see tools/config.py).
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from cli.args.base import add_base_args
from cli.args.modes import add_mode_args
from cli.dispatch import dispatch
from tools.config import load_env


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SonarQube Team Build pre-processor.")
    add_base_args(parser)
    add_mode_args(parser)
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    # Load .env from the repo root so terminal runs behave like agent runs.
    load_env()

    args = parse_args(argv)
    configure_logging(args.verbose)
    return dispatch(args)


if __name__ == "__main__":
    raise SystemExit(main())
