"""TFS (Team Foundation Server) build-server integration.

Split into:
  - api.py      : REST calls + build agent logging commands
  - coverage.py : coverage report URLs (polled with a timeout)
  - summary.py  : custom build summary section writer
  - service.py  : the narrow BuildService interface used by the CLI
  - runner.py   : download coverage reports for a build
  - types.py    : small shared data structures
"""
