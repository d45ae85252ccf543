"""Consistency lints over a built dependency graph.

Three independent checks run in a fixed order and their findings are
concatenated:

1. **cycle** (ERROR) -- every elementary dependency cycle.
2. **path-into-restricted** (WARNING) -- a path-local edge into a package
   that is only published to restricted registries. Outside this
   multi-repository view the same dependency would go through a registry
   and can silently drift to another version.
3. **conflicting-source** (WARNING) -- one package declares the same
   dependency with different sources (e.g. path in ``[dependencies]``,
   registry in ``[dev-dependencies]``).

Within each check findings are sorted, so identical graphs always give
identical finding sequences.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from repodeps.core.graph.classifier import EdgeColor, NodeColor
from repodeps.core.graph.model import DependencyGraph
from repodeps.core.lint.cycles import find_cycles
from repodeps.core.lint.models import LintFinding, LintReport, LintSeverity

logger = logging.getLogger(__name__)

Check = Callable[[DependencyGraph], list[LintFinding]]


def _label(graph: DependencyGraph, name: str) -> str:
    node = graph.get_node(name)
    repo = node.repository if node else None
    return f"{name}[{repo}]" if repo else name


def check_cycles(graph: DependencyGraph) -> list[LintFinding]:
    findings: list[LintFinding] = []
    for cycle in find_cycles(graph):
        labels = [_label(graph, name) for name in cycle]
        labels.append(labels[0])
        findings.append(LintFinding(
            check="cycle",
            severity=LintSeverity.ERROR,
            message=f"Dependency cycle: {' -> '.join(labels)}",
            path=cycle,
        ))
    return findings


def check_path_into_restricted(graph: DependencyGraph) -> list[LintFinding]:
    findings: list[LintFinding] = []
    for edge in graph.edges:
        if edge.color is not EdgeColor.BLUE:
            continue
        target = graph.get_node(edge.target)
        if target is None or target.color is not NodeColor.BLACK:
            continue
        registries = ", ".join(target.manifest.publish.registries) if target.manifest else ""
        findings.append(LintFinding(
            check="path-into-restricted",
            severity=LintSeverity.WARNING,
            message=(
                f"Path-local dependency {edge.source} -> {edge.target}, but "
                f"{edge.target} is only published to restricted registries "
                f"({registries}); versions may diverge outside this tree"
            ),
            path=edge.key,
        ))
    return findings


def check_conflicting_sources(graph: DependencyGraph) -> list[LintFinding]:
    findings: list[LintFinding] = []
    for conflict in graph.conflicting_declarations:
        edge = conflict.edge
        findings.append(LintFinding(
            check="conflicting-source",
            severity=LintSeverity.WARNING,
            message=(
                f"{edge.source} declares {edge.target} as both "
                f"{edge.declaration.source} and {conflict.declaration.source}"
            ),
            path=edge.key,
        ))
    return findings


DEFAULT_CHECKS: tuple[Check, ...] = (
    check_cycles,
    check_path_into_restricted,
    check_conflicting_sources,
)


class LintEngine:
    """Runs lint checks over a ``DependencyGraph``.

    The engine is stateless -- each ``run()`` call is independent.

    Usage::

        engine = LintEngine()
        findings, passed = engine.run(graph)
        for finding in findings:
            print(finding)

    Args:
        checks: Checks to run, in output order.
        fail_on_warnings: Also fail the run on WARNING findings. By default
            only ERROR findings (cycles) fail it.
    """

    def __init__(
        self,
        checks: tuple[Check, ...] = DEFAULT_CHECKS,
        *,
        fail_on_warnings: bool = False,
    ) -> None:
        self.checks = checks
        self.fail_on_warnings = fail_on_warnings

    def run(self, graph: DependencyGraph) -> LintReport:
        findings: list[LintFinding] = []
        for check in self.checks:
            found = check(graph)
            logger.debug("%s: %d finding(s)", check.__name__, len(found))
            findings.extend(found)

        threshold = LintSeverity.WARNING if self.fail_on_warnings else LintSeverity.ERROR
        passed = not any(f.severity >= threshold for f in findings)
        return LintReport(findings=findings, passed=passed)


def lint(
    graph: DependencyGraph, *, fail_on_warnings: bool = False
) -> tuple[list[LintFinding], bool]:
    """Lint ``graph`` with the default checks.

    Returns:
        ``(findings, passed)``.
    """
    report = LintEngine(fail_on_warnings=fail_on_warnings).run(graph)
    return report.findings, report.passed
