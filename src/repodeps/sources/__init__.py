"""Repository fetching and Cargo manifest parsing.

These feed the graph core: ``fetch_all`` turns repository specs into
snapshots, and ``ManifestStore.from_snapshots`` turns those into the store
the graph is built from.
"""

from repodeps.sources.cargo import parse_manifest, parse_manifest_data, parse_manifest_tree
from repodeps.sources.fetch import (
    RepositorySnapshot,
    fetch_all,
    fetch_all_async,
    load_local,
    load_remote,
)

__all__ = [
    "RepositorySnapshot",
    "fetch_all",
    "fetch_all_async",
    "load_local",
    "load_remote",
    "parse_manifest",
    "parse_manifest_data",
    "parse_manifest_tree",
]
