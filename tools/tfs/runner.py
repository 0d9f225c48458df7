"""tools/tfs/runner.py

Download the code coverage reports of a build.

  BuildService -> report URLs -> WebClientDownloader -> <output_dir>/<n>.coverage
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from tools.downloader import WebClientDownloader

from .service import BuildService


def download_coverage_reports(
    *,
    service: BuildService,
    downloader: WebClientDownloader,
    build_uri: str,
    output_dir: Path,
) -> List[Path]:
    """Download every coverage report of *build_uri* into *output_dir*.

    Reports the server no longer has (404) are skipped with a warning.
    Returns the paths that were written.
    """
    urls = service.get_coverage_report_urls(build_uri)
    if not urls:
        print(f"⚠️ No code coverage reports found for {build_uri}")
        return []

    out_dir = Path(output_dir)
    written: List[Path] = []
    for idx, url in enumerate(urls, start=1):
        target = out_dir / f"{idx}.coverage"
        if downloader.try_download_file_if_exists(url, target):
            written.append(target)
        else:
            print(f"⚠️ Coverage report not found (404): {url}")

    print(f"📥 Downloaded {len(written)} of {len(urls)} coverage report(s) to {out_dir}")
    return written
