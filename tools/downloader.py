"""tools/downloader.py

HTTP downloads from the SonarQube server and the build server.

One :class:`requests.Session` is created per downloader and carries the
default headers (User-Agent and, when credentials are given, Basic auth) on
every request. Reuse the instance for all downloads of a run and close it when
done (or use it as a context manager).

Outcomes:
  - HTTP 404 is a normal "does not exist" result for the ``try_*`` methods
  - any other HTTP error raises :class:`requests.HTTPError`
  - transport errors (DNS, connection refused, timeouts) propagate unchanged
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Callable, Optional, Tuple, TypeVar

import requests

from sonar_teambuild import __version__
from sonar_teambuild.io import write_bytes_atomic

logger = logging.getLogger(__name__)

USER_AGENT = f"SonarTeamBuild/{__version__}"
DEFAULT_TIMEOUT_SECONDS = 30
CHUNK_SIZE = 64 * 1024

T = TypeVar("T")


def _is_ascii(s: str) -> bool:
    return all(ord(c) < 128 for c in s)


def basic_auth_header(user_name: str, password: Optional[str]) -> str:
    """Return the ``Authorization`` header value for Basic auth.

    Raises:
        ValueError: if the user name contains ':' or either value is non-ASCII.
    """
    password = password or ""
    if ":" in user_name:
        raise ValueError("The user name cannot contain ':'.")
    if not _is_ascii(user_name) or not _is_ascii(password):
        raise ValueError("The user name and password must contain only ASCII characters.")
    credentials = f"{user_name}:{password}".encode("ascii")
    return "Basic " + base64.b64encode(credentials).decode("ascii")


class WebClientDownloader:
    def __init__(
        self,
        user_name: Optional[str] = None,
        password: Optional[str] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT
        if user_name is not None:
            self.session.headers["Authorization"] = basic_auth_header(user_name, password)

    # -------------------------
    # Lifecycle
    # -------------------------

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "WebClientDownloader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------
    # Downloads
    # -------------------------

    def get_header(self, name: str) -> Optional[str]:
        """Return the persistent default header *name*, or None if not set."""
        return self.session.headers.get(name)

    def try_download_if_exists(self, url: str) -> Tuple[bool, Optional[str]]:
        """Download *url* as text. Returns (False, None) if the server answers 404."""
        logger.debug("Downloading from %s...", url)

        def _get() -> str:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.text

        found, data = _ignoring_missing_urls(_get)
        return found, data

    def try_download_file_if_exists(self, url: str, target_path: Path) -> bool:
        """Stream *url* into *target_path*. Returns False if the server answers 404.

        The file is written atomically; nothing is left behind on failure.
        """
        target = Path(target_path)
        logger.debug("Downloading file from %s to %s...", url, target)

        def _get() -> int:
            with self.session.get(url, timeout=self.timeout, stream=True) as resp:
                resp.raise_for_status()
                return write_bytes_atomic(target, resp.iter_content(chunk_size=CHUNK_SIZE))

        found, size = _ignoring_missing_urls(_get)
        if found:
            logger.debug("Downloaded %d bytes to %s", size, target)
        return found

    def download(self, url: str) -> str:
        """Download *url* as text; every HTTP error raises."""
        logger.debug("Downloading from %s...", url)
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text


def _ignoring_missing_urls(op: Callable[[], T]) -> Tuple[bool, Optional[T]]:
    """Run a web operation, mapping HTTP 404 to (False, None).

    Other failures propagate.
    """
    try:
        return True, op()
    except requests.HTTPError as e:
        if e.response is not None and e.response.status_code == 404:
            return False, None
        raise
