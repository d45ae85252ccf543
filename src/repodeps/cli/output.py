"""Rich output formatting helpers for the repodeps CLI.

The DOT graph is the only thing written to stdout by ``repodeps graph``;
lint findings and status messages go to stderr so the graph can be piped
straight into ``dot``.

Severity Color Mapping:
    ERROR = bold red, WARNING = yellow
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from repodeps.core.graph import DependencyGraph, NodeColor
from repodeps.core.lint import LintFinding, LintSeverity

_SEVERITY_STYLES: dict[LintSeverity, str] = {
    LintSeverity.ERROR: "bold red",
    LintSeverity.WARNING: "yellow",
}

_NODE_COLOR_STYLES: dict[NodeColor, str] = {
    NodeColor.BLACK: "bold",
    NodeColor.BLUE: "blue",
    NodeColor.GREEN: "green",
    NodeColor.UNCLASSIFIED: "dim",
}

console = Console()
err_console = Console(stderr=True)


def severity_style(severity: LintSeverity) -> str:
    """Return the Rich style string for a given severity level."""
    return _SEVERITY_STYLES.get(severity, "white")


def print_findings(findings: list[LintFinding]) -> None:
    """Print lint findings to stderr, one per line, in the given order."""
    for finding in findings:
        line = Text.assemble(
            (f"[{finding.severity.name}]", severity_style(finding.severity)),
            " ",
            finding.message,
        )
        err_console.print(line, soft_wrap=True)


def print_lint_summary(findings: list[LintFinding], passed: bool) -> None:
    """Print a one-line lint verdict to stderr."""
    errors = sum(1 for f in findings if f.severity is LintSeverity.ERROR)
    warnings = len(findings) - errors
    verdict = Text("PASSED", style="bold green") if passed else Text("FAILED", style="bold red")
    err_console.print(
        Text.assemble("Lint ", verdict, f": {errors} error(s), {warnings} warning(s)"),
        soft_wrap=True,
    )


def findings_to_json(findings: list[LintFinding], passed: bool) -> dict[str, Any]:
    """Convert lint results to a JSON-serializable dict."""
    return {
        "passed": passed,
        "findings": [
            {
                "check": f.check,
                "severity": f.severity.name,
                "message": f.message,
                "path": list(f.path),
            }
            for f in findings
        ],
    }


def packages_to_json(graph: DependencyGraph) -> list[dict[str, Any]]:
    """Convert graph nodes to JSON-serializable dicts, sorted by name."""
    out: list[dict[str, Any]] = []
    for node in graph.nodes:
        manifest = node.manifest
        out.append({
            "name": node.name,
            "repository": manifest.repository if manifest else None,
            "version": manifest.version if manifest else None,
            "publish": str(manifest.publish) if manifest else None,
            "color": node.color.value,
            "dependencies": graph.successors(node.name),
        })
    return out


def print_package_table(graph: DependencyGraph) -> None:
    """Print a table of every package in the graph."""
    if graph.node_count == 0:
        console.print("[dim]No packages found.[/dim]")
        return

    table = Table(title="Packages", show_header=True, header_style="bold")
    table.add_column("Package", style="bold", overflow="fold")
    table.add_column("Repository", style="dim")
    table.add_column("Version")
    table.add_column("Publish")
    table.add_column("Deps", justify="right")

    for node in graph.nodes:
        manifest = node.manifest
        publish = Text(
            str(manifest.publish) if manifest else "external",
            style=_NODE_COLOR_STYLES.get(node.color, "white"),
        )
        table.add_row(
            node.name,
            manifest.repository if manifest else "-",
            manifest.version if manifest else "-",
            publish,
            str(len(graph.successors(node.name))),
        )
    console.print(table)
