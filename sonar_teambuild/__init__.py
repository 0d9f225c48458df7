"""sonar_teambuild

Core package for the SonarQube Team Build pre-processor.

What lives here
---------------
Only logic that is independent of any external service:

* :mod:`sonar_teambuild.ruleset` - rule-set XML generation
* :mod:`sonar_teambuild.retry`   - bounded polling with a timeout
* :mod:`sonar_teambuild.io`      - atomic filesystem writers

HTTP, build-server and CLI code lives in ``tools/`` and ``cli/`` and depends on
this package, never the other way around.
"""

from __future__ import annotations

__version__ = "0.1.0"
