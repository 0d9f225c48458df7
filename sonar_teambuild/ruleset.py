"""sonar_teambuild.ruleset

Rule-set file generation for the managed code analyzer.

The SonarQube quality profile decides which checks are active; the analyzer
only understands its own ``.ruleset`` XML format. This module turns an ordered
list of check ids into that format.

The output is produced from a fixed template rather than an XML library so the
bytes are stable: same ids in, same file out.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Iterable, List, Sequence
from xml.sax.saxutils import escape

from .errors import ValidationError
from .io.fs import write_text_atomic

RULESET_NAME = "SonarQube"
RULESET_DESCRIPTION = "Rule set generated by SonarQube"
TOOLS_VERSION = "12.0"
ANALYZER_ID = "Microsoft.Analyzers.ManagedCodeAnalysis"
RULE_NAMESPACE = "Microsoft.Rules.Managed"
RULE_ACTION = "Warning"

_HEADER = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    f'<RuleSet Name="{RULESET_NAME}" Description="{RULESET_DESCRIPTION}" ToolsVersion="{TOOLS_VERSION}">\n'
    f'  <Rules AnalyzerId="{ANALYZER_ID}" RuleNamespace="{RULE_NAMESPACE}">\n'
)
_FOOTER = "  </Rules>\n</RuleSet>\n"


def find_duplicates(ids: Iterable[str]) -> List[str]:
    """Ids that occur more than once, each listed once, in first-occurrence order."""
    counts = Counter(ids)
    return [check_id for check_id, n in counts.items() if n > 1]


def emit(ids: Sequence[str]) -> str:
    """Render *ids* as a rule-set document.

    Raises:
        ValidationError: if any id appears more than once. Nothing is rendered.
    """
    ids = list(ids)

    duplicates = find_duplicates(ids)
    if duplicates:
        raise ValidationError(
            "The following CheckId should not appear multiple times: " + ", ".join(duplicates)
        )

    lines = [_HEADER]
    for check_id in ids:
        attr = escape(check_id, {'"': "&quot;"})
        lines.append(f'    <Rule Id="{attr}" Action="{RULE_ACTION}" />\n')
    lines.append(_FOOTER)
    return "".join(lines)


def write_ruleset(path: Path, ids: Sequence[str]) -> Path:
    """Emit a rule-set for *ids* and write it to *path* (UTF-8, atomic)."""
    content = emit(ids)
    out = Path(path)
    write_text_atomic(out, content)
    return out
