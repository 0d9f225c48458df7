"""tools/tfs/coverage.py

Download URLs for the code coverage reports of a build.

The test management service sometimes has not finished processing coverage by
the time we ask for it, so the query is polled with
:func:`sonar_teambuild.retry.retry` before giving up.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol
from urllib.parse import quote

from sonar_teambuild.retry import retry

from .types import BuildCoverage, BuildDetail

logger = logging.getLogger(__name__)

# How long to keep asking TFS for coverage data, and how long to wait in between.
TIMEOUT_MS = 20000
RETRY_PERIOD_MS = 2000


class CoverageSource(Protocol):
    def get_build(self, build_uri: str) -> BuildDetail: ...

    def query_build_coverage(self, build: BuildDetail) -> List[BuildCoverage]: ...


def _escape(value: str) -> str:
    # RFC 3986 data-string escaping: everything but unreserved characters.
    return quote(value, safe="")


def get_coverage_uri(build: BuildDetail, coverage: BuildCoverage) -> str:
    server_path = (
        f"/BuildCoverage/{build.build_number}.{coverage.flavor}."
        f"{coverage.platform}.{coverage.configuration_id}.coverage"
    )
    return (
        f"{build.collection_uri.rstrip('/')}/{_escape(build.team_project)}"
        f"/_api/_build/ItemContent?buildUri={_escape(build.uri)}&path={_escape(server_path)}"
    )


def get_coverage_report_urls(
    client: CoverageSource,
    build_uri: str,
    log: Optional[logging.Logger] = None,
    *,
    timeout_ms: int = TIMEOUT_MS,
    retry_period_ms: int = RETRY_PERIOD_MS,
) -> List[str]:
    """Return download URLs for every coverage report of *build_uri*.

    Returns an empty list if no coverage shows up before the timeout.
    """
    if not build_uri or not build_uri.strip():
        raise ValueError("build_uri is required")
    log = log or logger

    build = client.get_build(build_uri)

    coverages: List[BuildCoverage] = []

    def _try_get_coverage_info() -> bool:
        nonlocal coverages
        coverages = client.query_build_coverage(build)
        return bool(coverages)

    if not retry(timeout_ms, retry_period_ms, _try_get_coverage_info, log):
        log.debug("No code coverage reports found for build %s", build.build_number)

    urls: List[str] = []
    for coverage in coverages:
        log.debug(
            "Coverage report: configuration id=%s, flavor=%s, platform=%s",
            coverage.configuration_id,
            coverage.flavor,
            coverage.platform,
        )
        urls.append(get_coverage_uri(build, coverage))

    log.debug("Finished fetching code coverage report URLs (%d found)", len(urls))
    return urls
