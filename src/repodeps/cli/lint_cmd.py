"""``repodeps lint <config>`` -- Run the graph lints without rendering.

Exit Codes:
    0 -- All lints passed.
    1 -- A lint failed (errors, or warnings with ``--fail-on-warnings``).
    2 -- Configuration, fetch, parse or package identity error.
"""

from __future__ import annotations

import json
import sys

import click

from repodeps.cli._common import load_graph, load_run_config
from repodeps.cli.output import findings_to_json, print_findings, print_lint_summary
from repodeps.core.lint import LintEngine


@click.command("lint")
@click.argument("config_path", metavar="CONFIG", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--fail-on-warnings/--no-fail-on-warnings",
    default=False,
    help="Also fail on warning-level findings.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--token",
    envvar="REPODEPS_TOKEN",
    default=None,
    help="Bearer token for private tarball downloads.",
)
def lint_command(
    config_path: str, fail_on_warnings: bool, output_format: str, token: str | None
) -> None:
    """Check the repositories in CONFIG for dependency cycles and mismatches."""
    config = load_run_config(config_path, fail_on_warnings=fail_on_warnings, token=token)
    _, graph = load_graph(config)

    findings, passed = LintEngine(fail_on_warnings=config.fail_on_warnings).run(graph)

    if output_format == "json":
        click.echo(json.dumps(findings_to_json(findings, passed), indent=2))
    else:
        print_findings(findings)
        print_lint_summary(findings, passed)

    sys.exit(0 if passed else 1)
