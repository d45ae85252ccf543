"""ManifestStore: the read-only name -> manifest mapping fed to the core."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Protocol

from repodeps.core.manifest.models import ManifestRecord
from repodeps.exceptions import ConfigurationError


class _Snapshot(Protocol):
    name: str
    manifests: list[ManifestRecord]


class ManifestStore(Mapping[str, ManifestRecord]):
    """Immutable mapping from package name to its manifest.

    Construction is the only place package identity is checked: two
    manifests with the same name, wherever they come from, make the run
    ambiguous and raise ``ConfigurationError``.
    """

    def __init__(self, records: Mapping[str, ManifestRecord] | None = None) -> None:
        self._records: dict[str, ManifestRecord] = {}
        for key, record in (records or {}).items():
            if key != record.name:
                raise ConfigurationError(
                    f"Manifest stored under {key!r} declares package {record.name!r}"
                )
            self._records[key] = record

    @classmethod
    def from_records(cls, records: Iterable[ManifestRecord]) -> ManifestStore:
        """Build a store from records, rejecting duplicate package names.

        Raises:
            ConfigurationError: If two records share a name.
        """
        by_name: dict[str, ManifestRecord] = {}
        for record in records:
            existing = by_name.get(record.name)
            if existing is not None:
                raise ConfigurationError(
                    f"Package {record.name} was defined multiple times, e.g. in "
                    f"repositories {existing.repository or '?'} and "
                    f"{record.repository or '?'}"
                )
            by_name[record.name] = record
        return cls(by_name)

    @classmethod
    def from_snapshots(cls, snapshots: Iterable[_Snapshot]) -> ManifestStore:
        """Build a store from every manifest of every repository snapshot."""
        return cls.from_records(
            record for snapshot in snapshots for record in snapshot.manifests
        )

    @property
    def repositories(self) -> list[str]:
        """Sorted names of the repositories contributing at least one manifest."""
        return sorted({r.repository for r in self._records.values()})

    def __getitem__(self, name: str) -> ManifestRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ManifestStore({sorted(self._records)!r})"
