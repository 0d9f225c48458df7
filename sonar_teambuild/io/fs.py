"""sonar_teambuild.io.fs

Atomic filesystem writers.

Generated artifacts (rule-set files, downloaded coverage reports, build summary
markdown) are consumed by other processes on the build agent. A half-written
file is worse than no file, so every writer goes through a temp file in the
target directory followed by ``os.replace()``.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional, TextIO, Union


def _atomic_write(
    path: Path,
    write_fn: Callable[[Union[TextIO, BinaryIO]], None],
    *,
    mode: str,
    encoding: Optional[str] = None,
    newline: Optional[str] = None,
) -> None:
    """Write a file atomically by writing to a temp file and os.replace()."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, mode, encoding=encoding, newline=newline) as f:
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, p)
    finally:
        # If os.replace fails, best-effort cleanup of the temp file.
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write text atomically.

    ``newline=""`` keeps the caller's line endings byte-for-byte.
    """

    def _write(f) -> None:
        f.write(text)

    _atomic_write(Path(path), _write, mode="w", encoding=encoding, newline="")


def write_bytes_atomic(path: Path, chunks: Iterable[bytes]) -> int:
    """Write an iterable of byte chunks atomically. Returns the byte count."""

    written = 0

    def _write(f) -> None:
        nonlocal written
        for chunk in chunks:
            if chunk:
                f.write(chunk)
                written += len(chunk)

    _atomic_write(Path(path), _write, mode="wb")
    return written
