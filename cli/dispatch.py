from __future__ import annotations

import argparse
from typing import Callable, Dict

from cli.commands.coverage import run_coverage
from cli.commands.download import run_download
from cli.commands.ruleset import run_ruleset
from cli.commands.summary import run_summary

COMMANDS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "ruleset": run_ruleset,
    "coverage": run_coverage,
    "download": run_download,
    "summary": run_summary,
}


def dispatch(args: argparse.Namespace) -> int:
    try:
        command = COMMANDS[args.mode]
    except KeyError:
        raise SystemExit(f"Unknown mode '{args.mode}'. Valid: {sorted(COMMANDS)}") from None
    return int(command(args))
