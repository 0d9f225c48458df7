from __future__ import annotations

import argparse

MODES = ("ruleset", "coverage", "download", "summary")


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register flags shared by every mode (mode selection, logging, servers)."""

    parser.add_argument(
        "--mode",
        choices=MODES,
        required=True,
        help=(
            "ruleset = write an analyzer rule-set file, coverage = list/download coverage reports, "
            "download = fetch one URL, summary = write build summary messages"
        ),
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    # SonarQube server
    parser.add_argument(
        "--sonar-host-url",
        default=None,
        help="SonarQube server URL (default: $SONAR_HOST_URL or http://localhost:9000)",
    )

    # TFS build
    parser.add_argument(
        "--collection-uri",
        default=None,
        help="TFS collection URI (default: $TF_BUILD_COLLECTIONURI)",
    )
    parser.add_argument(
        "--build-uri",
        default=None,
        help="Build URI, vstfs:///Build/Build/<id> (default: $TF_BUILD_BUILDURI)",
    )
