"""SonarQube integration modules.

Split into:
  - api.py    : SonarQube web API calls (quality profiles, active rules)
  - types.py  : connection settings
  - runner.py : fetch active rules -> write the analyzer rule-set file

The CLI (cli/commands/ruleset.py) acts as the orchestration layer.
"""
