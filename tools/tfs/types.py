"""tools/tfs/types.py

Small data structures shared by the TFS client, the coverage URL provider and
the build summary logger.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class TfsConfig:
    """Connection settings for a TFS / Azure DevOps Server collection."""
    collection_uri: str
    build_uri: str
    access_token: Optional[str] = None
    summary_dir: Path = Path(".sonarqube/summary")


@dataclass(frozen=True)
class BuildDetail:
    build_id: int
    build_number: str
    uri: str
    team_project: str
    collection_uri: str


@dataclass(frozen=True)
class BuildCoverage:
    """One code coverage result attached to a build (per configuration)."""
    configuration_id: int
    flavor: str
    platform: str


@dataclass(frozen=True)
class SummarySection:
    """A custom section on the build summary page."""
    name: str
    header: str
    # Where the section appears relative to the other summary sections.
    priority: int = 200
