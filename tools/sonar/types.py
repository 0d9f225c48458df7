from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SonarConfig:
    """Connection settings for SonarQube web API calls."""
    host: str
    login: Optional[str] = None
    password: Optional[str] = None

    def url(self, path: str) -> str:
        return f"{self.host.rstrip('/')}/{path.lstrip('/')}"
