from __future__ import annotations

import argparse


def add_mode_args(parser: argparse.ArgumentParser) -> None:
    """Register flags that only apply to one mode."""

    # ruleset
    parser.add_argument(
        "--output",
        default=None,
        help="(ruleset|download) Output file path",
    )
    parser.add_argument(
        "--rule-id",
        dest="rule_ids",
        action="append",
        default=None,
        help="(ruleset) Check id to include; repeat for several. Order is preserved.",
    )
    parser.add_argument(
        "--rule-ids-file",
        default=None,
        help="(ruleset) Text file with one check id per line",
    )
    parser.add_argument(
        "--project-key",
        default=None,
        help="(ruleset) Resolve active rules from this SonarQube project's quality profile",
    )
    parser.add_argument("--language", default="cs", help="(ruleset) Quality profile language (default: cs)")
    parser.add_argument("--repository", default="fxcop", help="(ruleset) Rule repository (default: fxcop)")

    # coverage
    parser.add_argument(
        "--output-dir",
        default=None,
        help="(coverage) Download the reports into this directory instead of only listing URLs",
    )

    # download
    parser.add_argument("--url", default=None, help="(download) URL to fetch")

    # summary
    parser.add_argument(
        "--message",
        dest="messages",
        action="append",
        default=None,
        help="(summary) Message to add to the build summary; repeat for several",
    )
