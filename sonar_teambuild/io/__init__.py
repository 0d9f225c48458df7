"""sonar_teambuild.io

Filesystem helpers shared by the rule-set writer, the summary logger and the
downloader.
"""

from __future__ import annotations

from .fs import write_bytes_atomic, write_text_atomic

__all__ = [
    "write_bytes_atomic",
    "write_text_atomic",
]
