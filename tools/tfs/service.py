"""tools/tfs/service.py

The build-server capability the rest of the tool depends on.

Commands talk to :class:`BuildService`, not to the REST client, so a
different build server only needs a new implementation of these two calls.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from .api import TfsClient
from .coverage import get_coverage_report_urls
from .summary import BuildSummaryLogger
from .types import TfsConfig


class BuildService(Protocol):
    def get_coverage_report_urls(self, build_uri: str) -> List[str]: ...

    def publish_summary(self, build_uri: str, message: str) -> None: ...


class TfsBuildService:
    def __init__(
        self,
        cfg: TfsConfig,
        *,
        client_factory: Callable[[TfsConfig], TfsClient] = TfsClient,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self.cfg = cfg
        self._client_factory = client_factory
        self._log = log or logging.getLogger(__name__)

    def _cfg_for(self, build_uri: str) -> TfsConfig:
        if build_uri == self.cfg.build_uri:
            return self.cfg
        return TfsConfig(
            collection_uri=self.cfg.collection_uri,
            build_uri=build_uri,
            access_token=self.cfg.access_token,
            summary_dir=self.cfg.summary_dir,
        )

    def get_coverage_report_urls(self, build_uri: str) -> List[str]:
        with self._client_factory(self._cfg_for(build_uri)) as client:
            return get_coverage_report_urls(client, build_uri, self._log)

    def publish_summary(self, build_uri: str, message: str) -> None:
        with BuildSummaryLogger(self._cfg_for(build_uri), client_factory=self._client_factory) as summary:
            summary.write_message(message)
