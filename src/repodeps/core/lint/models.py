"""Data models for the lint engine: LintSeverity, LintFinding, LintReport.

Kept apart from the checks so the CLI formatters can import them without
pulling in the cycle search.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class LintSeverity(IntEnum):
    """Two-level severity scale. Only ERROR fails a run by default."""

    WARNING = 1
    ERROR = 2


@dataclass(frozen=True)
class LintFinding:
    """A single lint observation.

    Attributes:
        check: Identifier of the check that produced it (e.g. "cycle").
        severity: WARNING or ERROR.
        message: Human-readable, single-line description.
        path: Node names the finding is about, enough to re-verify it
            against the graph: the cycle in canonical order, or the
            (from, to) pair of an edge.
    """

    check: str
    severity: LintSeverity
    message: str
    path: tuple[str, ...]

    def __str__(self) -> str:
        return f"[{self.severity.name}] {self.message}"


@dataclass
class LintReport:
    """All findings of one lint run plus the overall verdict."""

    findings: list[LintFinding] = field(default_factory=list)
    passed: bool = True

    @property
    def errors(self) -> list[LintFinding]:
        return [f for f in self.findings if f.severity is LintSeverity.ERROR]

    @property
    def warnings(self) -> list[LintFinding]:
        return [f for f in self.findings if f.severity is LintSeverity.WARNING]

    def __iter__(self):
        # Allows ``findings, passed = engine.run(graph)``.
        return iter((self.findings, self.passed))
