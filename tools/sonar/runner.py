"""tools/sonar/runner.py

Rule-set generation.

  SonarQube quality profile -> active rule check ids -> <name>.ruleset

Callers either pass explicit check ids or a project key; in the latter case
the ids are resolved from the server. The write itself is delegated to
:func:`sonar_teambuild.ruleset.write_ruleset`, so duplicate ids fail before
anything touches the disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from sonar_teambuild.ruleset import write_ruleset

from tools.downloader import WebClientDownloader
from tools.sonar.api import fetch_active_rule_keys, fetch_quality_profile_key
from tools.sonar.types import SonarConfig

DEFAULT_LANGUAGE = "cs"
DEFAULT_REPOSITORY = "fxcop"


def resolve_rule_ids(
    *,
    downloader: WebClientDownloader,
    cfg: SonarConfig,
    project_key: str,
    language: str = DEFAULT_LANGUAGE,
    repository: str = DEFAULT_REPOSITORY,
) -> Sequence[str]:
    profile_key = fetch_quality_profile_key(downloader, cfg, project_key, language)
    if not profile_key:
        raise RuntimeError(f"No quality profile found for language '{language}' on {cfg.host}.")
    print(f"Using quality profile: {profile_key}")
    return fetch_active_rule_keys(downloader, cfg, profile_key, repository)


def execute(
    *,
    output: Path,
    cfg: Optional[SonarConfig] = None,
    rule_ids: Optional[Sequence[str]] = None,
    project_key: Optional[str] = None,
    language: str = DEFAULT_LANGUAGE,
    repository: str = DEFAULT_REPOSITORY,
    downloader: Optional[WebClientDownloader] = None,
) -> Path:
    """Write a rule-set file and return its path.

    Exactly one of *rule_ids* / *project_key* must be given.
    """
    if (rule_ids is None) == (project_key is None):
        raise ValueError("Provide either rule_ids or project_key (not both).")

    if rule_ids is None:
        if cfg is None:
            raise ValueError("cfg is required when resolving rules from the server.")
        owns_downloader = downloader is None
        dl = downloader or WebClientDownloader(cfg.login, cfg.password)
        try:
            rule_ids = resolve_rule_ids(
                downloader=dl,
                cfg=cfg,
                project_key=str(project_key),
                language=language,
                repository=repository,
            )
        finally:
            if owns_downloader:
                dl.close()
        print(f"📥 Retrieved {len(rule_ids)} active rules from SonarQube")

    path = write_ruleset(output, rule_ids)
    print("📄 Rule set saved to:", path)
    return path
