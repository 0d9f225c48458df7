from __future__ import annotations

import argparse
from pathlib import Path

from tools.config import get_sonar_config
from tools.downloader import WebClientDownloader


def run_download(args: argparse.Namespace) -> int:
    if not args.url:
        raise SystemExit("--url is required in download mode.")

    cfg = get_sonar_config(args.sonar_host_url)
    with WebClientDownloader(cfg.login, cfg.password) as downloader:
        if args.output:
            found = downloader.try_download_file_if_exists(args.url, Path(args.output))
            if found:
                print("📄 Saved to:", args.output)
        else:
            found, text = downloader.try_download_if_exists(args.url)
            if found:
                print(text)

    if not found:
        print(f"⚠️ Not found (404): {args.url}")
        return 1
    return 0
