"""tools/tfs/api.py

All TFS / Azure DevOps Server calls live here.

The rest of the package only needs three things from the build server:

  - the details of the running build (number, team project, uri)
  - the code coverage results attached to it
  - a way to add a custom section to the build summary

:class:`TfsClient` provides exactly those over the REST API and the build
agent's logging commands. Parsing of the payloads is kept in small pure
functions so it can be tested without a server.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests

from sonar_teambuild.io import write_text_atomic

from tools.downloader import USER_AGENT

from .types import BuildCoverage, BuildDetail, SummarySection, TfsConfig

logger = logging.getLogger(__name__)

BUILD_API_VERSION = "2.0"
COVERAGE_API_VERSION = "2.0-preview"

# Query only module-level coverage data; mirrors the "Modules" query flag.
COVERAGE_QUERY_FLAGS = 1

_BUILD_ID_RE = re.compile(r"(\d+)/?$")


def parse_build_id(build_uri: str) -> int:
    """Extract the numeric build id from ``vstfs:///Build/Build/<id>``."""
    m = _BUILD_ID_RE.search((build_uri or "").strip())
    if not m:
        raise ValueError(f"Not a build URI (expected vstfs:///Build/Build/<id>): {build_uri!r}")
    return int(m.group(1))


def parse_build_detail(payload: Dict[str, Any], *, collection_uri: str) -> BuildDetail:
    project = payload.get("project") or {}
    try:
        return BuildDetail(
            build_id=int(payload["id"]),
            build_number=str(payload["buildNumber"]),
            uri=str(payload["uri"]),
            team_project=str(project["name"]),
            collection_uri=collection_uri.rstrip("/"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RuntimeError(f"Unexpected build payload from {collection_uri}: missing {e}") from e


def parse_build_coverage(payload: Dict[str, Any]) -> List[BuildCoverage]:
    out: List[BuildCoverage] = []
    for entry in payload.get("value", []) or []:
        if not isinstance(entry, dict):
            continue
        conf = entry.get("configuration") or {}
        if "id" not in conf:
            continue
        try:
            configuration_id = int(conf["id"])
        except (TypeError, ValueError) as e:
            raise RuntimeError(f"Unexpected coverage payload: bad configuration id {conf['id']!r}") from e
        out.append(
            BuildCoverage(
                configuration_id=configuration_id,
                flavor=str(conf.get("flavor") or ""),
                platform=str(conf.get("platform") or ""),
            )
        )
    return out


def _section_marker(section: SummarySection) -> str:
    return f"<!-- {section.name} priority={section.priority} -->"


def render_summary_markdown(section: SummarySection, messages: Sequence[str]) -> str:
    lines = [_section_marker(section)]
    lines.extend(f"- {m}" for m in messages)
    return "\n".join(lines) + "\n"


def parse_summary_markdown(section: SummarySection, text: str) -> List[str]:
    """Messages previously rendered for *section*; [] if *text* belongs to another section."""
    lines = text.splitlines()
    if not lines or lines[0] != _section_marker(section):
        return []
    return [ln[2:] for ln in lines[1:] if ln.startswith("- ")]


class TfsClient:
    def __init__(self, cfg: TfsConfig, *, timeout: float = 30, session: Optional[requests.Session] = None) -> None:
        self.cfg = cfg
        self.timeout = timeout
        self.collection_uri = cfg.collection_uri.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT
        self.session.headers["Accept"] = "application/json"
        if cfg.access_token:
            self.session.headers["Authorization"] = f"Bearer {cfg.access_token}"

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "TfsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        resp = self.session.get(url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise RuntimeError(f"Could not decode JSON from {url}") from e
        if not isinstance(data, dict):
            raise RuntimeError(f"Expected a JSON object from {url}")
        return data

    def get_build(self, build_uri: str) -> BuildDetail:
        build_id = parse_build_id(build_uri)
        logger.debug("Fetching build information for build %d...", build_id)
        data = self._get_json(
            f"{self.collection_uri}/_apis/build/builds/{build_id}",
            {"api-version": BUILD_API_VERSION},
        )
        return parse_build_detail(data, collection_uri=self.collection_uri)

    def query_build_coverage(self, build: BuildDetail) -> List[BuildCoverage]:
        logger.debug("Fetching code coverage report information from TFS...")
        data = self._get_json(
            f"{self.collection_uri}/{quote(build.team_project, safe='')}/_apis/test/codecoverage",
            {
                "buildId": build.build_id,
                "flags": COVERAGE_QUERY_FLAGS,
                "api-version": COVERAGE_API_VERSION,
            },
        )
        return parse_build_coverage(data)

    def publish_summary(self, build: BuildDetail, section: SummarySection, messages: Sequence[str]) -> Path:
        """Attach *messages* to the build summary as a custom section.

        Writes a markdown file named after the section header and hands it to
        the build agent through the ``task.uploadsummary`` logging command.
        Messages already published to the section are kept ahead of the new ones.
        """
        path = Path(self.cfg.summary_dir) / f"{section.header}.md"
        existing: List[str] = []
        if path.is_file():
            existing = parse_summary_markdown(section, path.read_text(encoding="utf-8"))
        write_text_atomic(path, render_summary_markdown(section, existing + list(messages)))
        # The agent picks logging commands up from stdout.
        print(f"##vso[task.uploadsummary]{path.resolve()}", flush=True)
        logger.debug("Published %d summary message(s) for build %s", len(messages), build.build_number)
        return path
