"""Lint engine: dependency cycles and source/publish mismatches.

All public names are re-exported here::

    from repodeps.core.lint import lint, LintEngine, LintFinding, LintSeverity
"""

from repodeps.core.lint.models import LintFinding, LintReport, LintSeverity
from repodeps.core.lint.cycles import canonical_cycle, find_cycles
from repodeps.core.lint.engine import DEFAULT_CHECKS, LintEngine, lint

__all__ = [
    "DEFAULT_CHECKS",
    "LintEngine",
    "LintFinding",
    "LintReport",
    "LintSeverity",
    "canonical_cycle",
    "find_cycles",
    "lint",
]
