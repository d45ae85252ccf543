"""Manifest records and the Manifest Store.

All public names are re-exported here::

    from repodeps.core.manifest import ManifestRecord, ManifestStore, Publish
"""

from repodeps.core.manifest.models import (
    DependencyDeclaration,
    DependencySource,
    ManifestRecord,
    Publish,
    PublishKind,
    SourceKind,
)
from repodeps.core.manifest.store import ManifestStore

__all__ = [
    "DependencyDeclaration",
    "DependencySource",
    "ManifestRecord",
    "ManifestStore",
    "Publish",
    "PublishKind",
    "SourceKind",
]
