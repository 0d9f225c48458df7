from __future__ import annotations

import argparse
from pathlib import Path

from tools.config import get_tfs_config
from tools.downloader import WebClientDownloader
from tools.tfs.runner import download_coverage_reports
from tools.tfs.service import TfsBuildService


def run_coverage(args: argparse.Namespace) -> int:
    cfg = get_tfs_config(collection_uri=args.collection_uri, build_uri=args.build_uri)
    service = TfsBuildService(cfg)

    if not args.output_dir:
        urls = service.get_coverage_report_urls(cfg.build_uri)
        for url in urls:
            print(url)
        if not urls:
            print(f"⚠️ No code coverage reports found for {cfg.build_uri}")
            return 1
        return 0

    # TFS accepts an access token as the Basic auth password with an empty user name.
    user_name = "" if cfg.access_token else None
    with WebClientDownloader(user_name, cfg.access_token) as downloader:
        written = download_coverage_reports(
            service=service,
            downloader=downloader,
            build_uri=cfg.build_uri,
            output_dir=Path(args.output_dir),
        )
    return 0 if written else 1
