"""``repodeps graph <config>`` -- Render the cross-repository dependency graph.

Fetches every configured repository, builds the package graph, runs the
lints, prints their findings to stderr and writes the DOT graph to stdout
(or ``--output``). ``--cluster`` boxes packages by repository and
``--use-colors`` fills them with a per-repository color::

    repodeps graph repos.yaml | dot -Tsvg > deps.svg

Exit Codes:
    0 -- Graph written (lint failures are ignored unless ``--lint``).
    1 -- ``--lint`` is active and a lint failed.
    2 -- Configuration, fetch, parse, package identity or output error.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from repodeps.cli._common import EXIT_INPUT_ERROR, load_graph, load_run_config
from repodeps.cli.output import print_findings
from repodeps.core.lint import LintEngine
from repodeps.core.render import render
from repodeps.exceptions import InputError


@click.command("graph")
@click.argument("config_path", metavar="CONFIG", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--lint/--no-lint",
    default=False,
    help="Return a non-zero exit code if some lints report errors.",
)
@click.option(
    "--fail-on-warnings/--no-fail-on-warnings",
    default=False,
    help="With --lint, also fail on warning-level findings.",
)
@click.option(
    "--cluster/--no-cluster",
    default=False,
    help="Group packages into one subgraph per repository.",
)
@click.option(
    "--use-colors/--no-use-colors",
    default=False,
    help="Fill each package with a per-repository color instead of clustering.",
)
@click.option(
    "--external/--no-external",
    "include_external",
    default=True,
    help="Show dependencies on packages outside the scanned repositories.",
)
@click.option(
    "--token",
    envvar="REPODEPS_TOKEN",
    default=None,
    help="Bearer token for private tarball downloads.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the DOT graph to a file instead of stdout.",
)
def graph_command(
    config_path: str,
    lint: bool,
    fail_on_warnings: bool,
    cluster: bool,
    use_colors: bool,
    include_external: bool,
    token: str | None,
    output: str | None,
) -> None:
    """Render the dependency graph of all repositories in CONFIG as DOT.

    Node colors: green = public, blue = unpublished, black = restricted
    registry, gray = outside the scanned repositories. Edge colors: blue =
    path dependency, black = registry dependency.
    """
    config = load_run_config(
        config_path,
        lint=lint,
        fail_on_warnings=fail_on_warnings,
        cluster=cluster,
        use_colors=use_colors,
        include_external=include_external,
        token=token,
    )
    if config.cluster and config.use_colors:
        click.echo("Error: --cluster and --use-colors cannot be combined", err=True)
        sys.exit(EXIT_INPUT_ERROR)
    _, graph = load_graph(config)

    report = LintEngine(fail_on_warnings=config.fail_on_warnings).run(graph)
    print_findings(report.findings)

    try:
        dot = render(
            graph,
            cluster_by_repository=config.cluster,
            color_by_repository=config.use_colors,
        )
    except InputError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    if output:
        try:
            Path(output).write_text(dot, encoding="utf-8")
        except OSError as exc:
            click.echo(f"Error: Failed to write {output}: {exc}", err=True)
            sys.exit(EXIT_INPUT_ERROR)
        click.echo(f"Graph written to: {output}", err=True)
    else:
        click.echo(dot, nl=False)

    if config.lint and not report.passed:
        click.echo("Error: Some lints reported issues, see messages above", err=True)
        sys.exit(1)
