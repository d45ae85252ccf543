"""Shared plumbing for CLI commands: config merging and graph loading."""

from __future__ import annotations

import logging
import sys
from typing import Any

import click
from click.core import ParameterSource

from repodeps.config import RunConfig, load_config
from repodeps.core.graph import DependencyGraph, build_graph
from repodeps.core.manifest import ManifestStore
from repodeps.exceptions import ConfigurationError, InputError
from repodeps.sources import fetch_all

logger = logging.getLogger(__name__)

# Exit code for input, fetch, parse and package identity failures.
EXIT_INPUT_ERROR = 2


def _given(ctx: click.Context, name: str) -> bool:
    return ctx.get_parameter_source(name) in (
        ParameterSource.COMMANDLINE,
        ParameterSource.ENVIRONMENT,
    )


def load_run_config(config_path: str, **overrides: Any) -> RunConfig:
    """Load the config file and apply options explicitly passed on the command line.

    Exits with ``EXIT_INPUT_ERROR`` if the file is invalid.
    """
    ctx = click.get_current_context()
    try:
        config = load_config(config_path)
    except InputError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    for name, value in overrides.items():
        if _given(ctx, name):
            setattr(config, name, value)
    return config


def load_graph(config: RunConfig) -> tuple[ManifestStore, DependencyGraph]:
    """Fetch every repository, then build the store and the graph.

    Exits with ``EXIT_INPUT_ERROR`` on fetch, parse or identity failures;
    nothing is written to stdout in that case.
    """
    try:
        snapshots = fetch_all(config.repositories, token=config.token)
        store = ManifestStore.from_snapshots(snapshots)
        graph = build_graph(store, include_external=config.include_external)
    except (InputError, ConfigurationError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    logger.info(
        "Built graph of %d package(s) from %d repositories",
        graph.node_count, len(config.repositories),
    )
    return store, graph
