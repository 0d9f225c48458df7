"""tools/config.py

Runtime settings for the pre-processor.

Settings come from the process environment. A ``.env`` file at the repository
root is loaded first (values already in the environment win), so local runs
behave like runs on a build agent where the variables are set by the agent.

Variables
---------
SONAR_HOST_URL          SonarQube server (default: http://localhost:9000)
SONAR_LOGIN             optional user name or token
SONAR_PASSWORD          optional password
TF_BUILD_COLLECTIONURI  TFS collection URI
TF_BUILD_BUILDURI       vstfs:///Build/Build/<id> of the running build
SYSTEM_ACCESSTOKEN      optional OAuth token for the TFS REST API
SONAR_SUMMARY_DIR       where build summary markdown is written
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tools.sonar.types import SonarConfig
from tools.tfs.types import TfsConfig

# Repo root = parent of tools/
ROOT_DIR = Path(__file__).resolve().parents[1]
ENV_PATH = ROOT_DIR / ".env"

SONAR_HOST_DEFAULT = "http://localhost:9000"
SUMMARY_DIR_DEFAULT = ".sonarqube/summary"


def load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load ``.env`` into os.environ without overriding existing variables."""
    load_dotenv(dotenv_path or ENV_PATH, override=False)


def _require(var: str, value: Optional[str]) -> str:
    if not value or not value.strip():
        raise SystemExit(f"ERROR: {var} is not set.")
    return value.strip()


def get_sonar_config(host: Optional[str] = None) -> SonarConfig:
    return SonarConfig(
        host=host or os.environ.get("SONAR_HOST_URL", SONAR_HOST_DEFAULT),
        login=os.environ.get("SONAR_LOGIN") or None,
        password=os.environ.get("SONAR_PASSWORD") or None,
    )


def get_tfs_config(
    *,
    collection_uri: Optional[str] = None,
    build_uri: Optional[str] = None,
) -> TfsConfig:
    """Build a TfsConfig from explicit values, falling back to the environment."""
    return TfsConfig(
        collection_uri=_require("TF_BUILD_COLLECTIONURI", collection_uri or os.environ.get("TF_BUILD_COLLECTIONURI")),
        build_uri=_require("TF_BUILD_BUILDURI", build_uri or os.environ.get("TF_BUILD_BUILDURI")),
        access_token=os.environ.get("SYSTEM_ACCESSTOKEN") or None,
        summary_dir=Path(os.environ.get("SONAR_SUMMARY_DIR", SUMMARY_DIR_DEFAULT)),
    )
