"""tools/tfs/summary.py

Custom build summary messages.

The logger connects to the build server when the first message is written and
publishes all written messages when it is closed.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .api import TfsClient
from .types import BuildDetail, SummarySection, TfsConfig

logger = logging.getLogger(__name__)

SONAR_SUMMARY_SECTION = SummarySection(
    name="SonarTeamBuildSummary",
    header="SonarQube Analysis Summary",
    priority=200,
)


class BuildSummaryLogger:
    def __init__(
        self,
        cfg: TfsConfig,
        *,
        client_factory: Callable[[TfsConfig], TfsClient] = TfsClient,
        section: SummarySection = SONAR_SUMMARY_SECTION,
    ) -> None:
        if not cfg.collection_uri or not cfg.collection_uri.strip():
            raise ValueError("collection_uri is required")
        if not cfg.build_uri or not cfg.build_uri.strip():
            raise ValueError("build_uri is required")

        self.cfg = cfg
        self.section = section
        self._client_factory = client_factory
        self._client: Optional[TfsClient] = None
        self._build: Optional[BuildDetail] = None
        self._messages: List[str] = []
        self._closed = False

    @property
    def messages(self) -> List[str]:
        return list(self._messages)

    def write_message(self, message: str, *args: object) -> None:
        """Queue a summary message; ``str.format`` is applied when *args* are given."""
        if not message or not message.strip():
            raise ValueError("message is required")
        if self._closed:
            raise RuntimeError("BuildSummaryLogger is closed")

        final_message = message.format(*args) if args else message

        self._ensure_connected()
        self._messages.append(final_message)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        if self._client is None:
            return
        try:
            if self._build is not None and self._messages:
                self._client.publish_summary(self._build, self.section, self._messages)
        finally:
            self._client.close()
            self._client = None
            self._build = None

    def __enter__(self) -> "BuildSummaryLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _ensure_connected(self) -> None:
        if self._client is None:
            logger.debug("Connecting to TFS at %s", self.cfg.collection_uri)
            self._client = self._client_factory(self.cfg)
            self._build = self._client.get_build(self.cfg.build_uri)
