"""repodeps CLI -- Cross-repository dependency graphs for Cargo workspaces.

Entry point for the ``repodeps`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    graph     -- Render the dependency graph as Graphviz DOT.
    lint      -- Check for dependency cycles and source mismatches.
    packages  -- List every package with its publish classification.

Usage::

    repodeps graph repos.yaml | dot -Tsvg > deps.svg
    repodeps graph repos.yaml --lint --cluster
    repodeps lint repos.yaml --format json
    repodeps -v packages repos.yaml
"""

from __future__ import annotations

import logging
import sys

import click

from repodeps import __version__
from repodeps.cli.graph_cmd import graph_command
from repodeps.cli.lint_cmd import lint_command
from repodeps.cli.packages_cmd import packages_command


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def cli(verbose: bool) -> None:
    """repodeps: Dependency graphs across independently versioned repositories.

    Fetches every configured repository, builds one package graph across
    all of them, and reports dependency cycles and path/registry mismatches.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


# Register all subcommands
cli.add_command(graph_command)
cli.add_command(lint_command)
cli.add_command(packages_command)
