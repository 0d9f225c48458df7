from __future__ import annotations

import argparse

from tools.config import get_tfs_config
from tools.tfs.summary import BuildSummaryLogger


def run_summary(args: argparse.Namespace) -> int:
    messages = [m for m in (args.messages or []) if m and m.strip()]
    if not messages:
        raise SystemExit("At least one non-empty --message is required in summary mode.")

    cfg = get_tfs_config(collection_uri=args.collection_uri, build_uri=args.build_uri)
    with BuildSummaryLogger(cfg) as summary:
        for message in messages:
            summary.write_message(message)

    print(f"✅ Wrote {len(messages)} build summary message(s).")
    return 0
