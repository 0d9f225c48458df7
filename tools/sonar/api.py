"""tools/sonar/api.py

All SonarQube HTTP calls live here.

Design goals:
  - Keep network I/O separated from rule-set generation.
  - Go through :class:`tools.downloader.WebClientDownloader` so every request
    carries the same User-Agent and credentials.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from tools.downloader import WebClientDownloader

from .types import SonarConfig

logger = logging.getLogger(__name__)

RULES_PAGE_SIZE = 500


def _get_json(downloader: WebClientDownloader, url: str) -> Optional[Dict[str, Any]]:
    """GET *url* and decode JSON. Returns None on 404."""
    found, text = downloader.try_download_if_exists(url)
    if not found:
        return None
    try:
        data = json.loads(text or "")
    except ValueError as e:
        raise RuntimeError(f"Could not decode JSON from {url}: {e}") from e
    if not isinstance(data, dict):
        raise RuntimeError(f"Expected a JSON object from {url}, got {type(data).__name__}")
    return data


def _pick_profile_key(data: Optional[Dict[str, Any]], language: str) -> Optional[str]:
    for profile in (data or {}).get("profiles", []) or []:
        if not isinstance(profile, dict):
            continue
        if profile.get("language") == language and profile.get("key"):
            return str(profile["key"])
    return None


def fetch_quality_profile_key(
    downloader: WebClientDownloader,
    cfg: SonarConfig,
    project_key: str,
    language: str,
) -> Optional[str]:
    """Return the quality profile key used by *project_key* for *language*.

    Falls back to the server's default profile for the language when the
    project does not exist yet (first analysis) or has no profile for it.
    """
    query = urlencode({"project": project_key, "language": language})
    data = _get_json(downloader, cfg.url(f"/api/qualityprofiles/search?{query}"))
    key = _pick_profile_key(data, language)
    if key:
        return key

    logger.debug("No %s profile bound to project %s; using the default profile", language, project_key)
    query = urlencode({"defaults": "true", "language": language})
    data = _get_json(downloader, cfg.url(f"/api/qualityprofiles/search?{query}"))
    return _pick_profile_key(data, language)


def _check_id(rule: Dict[str, Any]) -> Optional[str]:
    internal = rule.get("internalKey")
    if isinstance(internal, str) and internal.strip():
        return internal.strip()
    key = rule.get("key")
    if isinstance(key, str) and key.strip():
        # "fxcop:CA1000" -> "CA1000"
        return key.split(":", 1)[-1].strip()
    return None


def fetch_active_rule_keys(
    downloader: WebClientDownloader,
    cfg: SonarConfig,
    profile_key: str,
    repository: str,
) -> List[str]:
    """Fetch the check ids of all rules of *repository* active in *profile_key*.

    Pages through /api/rules/search. Ids are de-duplicated preserving order.
    """
    check_ids: List[str] = []
    seen: set[str] = set()
    page = 1

    while True:
        query = urlencode(
            {
                "activation": "true",
                "qprofile": profile_key,
                "repositories": repository,
                "f": "internalKey",
                "ps": RULES_PAGE_SIZE,
                "p": page,
            }
        )
        data = _get_json(downloader, cfg.url(f"/api/rules/search?{query}"))
        if data is None:
            logger.warning("Rules search returned 404 for profile %s", profile_key)
            break

        rules = data.get("rules", []) or []
        for rule in rules:
            if not isinstance(rule, dict):
                continue
            check_id = _check_id(rule)
            if check_id and check_id not in seen:
                seen.add(check_id)
                check_ids.append(check_id)

        total = data.get("total")
        if len(rules) < RULES_PAGE_SIZE:
            break
        if isinstance(total, int) and page * RULES_PAGE_SIZE >= total:
            break
        page += 1

    return check_ids
