"""``repodeps packages <config>`` -- List every package found.

Exit Codes:
    0 -- Listing printed.
    2 -- Configuration, fetch, parse or package identity error.
"""

from __future__ import annotations

import json

import click

from repodeps.cli._common import load_graph, load_run_config
from repodeps.cli.output import packages_to_json, print_package_table


@click.command("packages")
@click.argument("config_path", metavar="CONFIG", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--external/--no-external",
    "include_external",
    default=True,
    help="Include packages outside the scanned repositories.",
)
@click.option(
    "--token",
    envvar="REPODEPS_TOKEN",
    default=None,
    help="Bearer token for private tarball downloads.",
)
def packages_command(
    config_path: str, output_format: str, include_external: bool, token: str | None
) -> None:
    """List the packages of the repositories in CONFIG with their classification."""
    config = load_run_config(config_path, include_external=include_external, token=token)
    _, graph = load_graph(config)

    if output_format == "json":
        click.echo(json.dumps(packages_to_json(graph), indent=2))
    else:
        print_package_table(graph)
