from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from sonar_teambuild.errors import ValidationError

from tools.config import get_sonar_config
from tools.sonar import runner


def _read_rule_ids_file(path: str) -> List[str]:
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    return [ln.strip() for ln in lines if ln.strip() and not ln.strip().startswith("#")]


def _collect_rule_ids(args: argparse.Namespace) -> Optional[List[str]]:
    ids: List[str] = []
    explicit = False
    if args.rule_ids:
        ids.extend(args.rule_ids)
        explicit = True
    if args.rule_ids_file:
        ids.extend(_read_rule_ids_file(args.rule_ids_file))
        explicit = True
    return ids if explicit else None


def run_ruleset(args: argparse.Namespace) -> int:
    if not args.output:
        raise SystemExit("--output is required in ruleset mode.")

    rule_ids = _collect_rule_ids(args)
    if rule_ids is None and not args.project_key:
        raise SystemExit("Pass --rule-id/--rule-ids-file or --project-key in ruleset mode.")
    if rule_ids is not None and args.project_key:
        raise SystemExit("--project-key cannot be combined with explicit rule ids.")

    try:
        runner.execute(
            output=Path(args.output),
            cfg=get_sonar_config(args.sonar_host_url) if args.project_key else None,
            rule_ids=rule_ids,
            project_key=args.project_key,
            language=args.language,
            repository=args.repository,
        )
    except (ValidationError, RuntimeError) as e:
        print(f"ERROR: {e}")
        return 1
    return 0
