"""sonar_teambuild.retry

Bounded polling.

Some build-server data (code coverage in particular) shows up a little while
after the build step that produced it. Callers wrap the "is it there yet?"
check in a probe and let :func:`retry` poll it until it succeeds or time runs
out.

Semantics:
  - the probe returning ``False`` means "not yet"; it is retried
  - the probe raising means "broken"; the exception propagates untouched
  - running out of time is a normal outcome: :func:`retry` returns ``False``
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def retry(
    timeout_ms: int,
    interval_ms: int,
    probe: Callable[[], bool],
    log: Optional[logging.Logger] = None,
) -> bool:
    """Call *probe* until it returns True or *timeout_ms* has elapsed.

    Sleeps *interval_ms* between unsuccessful attempts. Returns whether the
    probe eventually succeeded. Diagnostics go to *log* (default: this
    module's logger) at DEBUG level.
    """
    if timeout_ms <= 0:
        raise ValueError(f"timeout_ms must be > 0 (got {timeout_ms})")
    if interval_ms <= 0:
        raise ValueError(f"interval_ms must be > 0 (got {interval_ms})")

    log = log or logger

    start = time.monotonic()
    attempts = 1
    succeeded = bool(probe())

    while not succeeded and _elapsed_ms(start) < timeout_ms:
        log.debug("Operation not yet successful (attempt %d); retrying in %d ms", attempts, interval_ms)
        time.sleep(interval_ms / 1000.0)
        attempts += 1
        succeeded = bool(probe())

    elapsed = _elapsed_ms(start)
    if succeeded:
        log.debug("Operation succeeded after %d attempt(s). Elapsed time (ms): %d", attempts, elapsed)
    else:
        log.debug("Operation timed out after %d attempt(s). Elapsed time (ms): %d", attempts, elapsed)
    return succeeded


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000.0
