"""Repository snapshot retrieval.

A repository location is one of:

- an HTTP(S) URL of a tarball, downloaded with ``httpx`` (with a bearer
  token for private hosts),
- a local tarball,
- a local directory (a checkout).

Compression is detected by ``tarfile``. Archives are read in memory and
never extracted to disk. Every ``Cargo.toml`` found (outside ``target/``
and ``.git/``) is parsed into a ``ManifestRecord``.

All repositories are fetched concurrently; ``fetch_all`` only returns once
every one of them has been loaded. The first failure cancels the fetches
still in flight and aborts the run. Archive parsing runs in worker threads
so it does not stall other downloads.
"""

from __future__ import annotations

import asyncio
import io
import logging
import tarfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

import httpx

from repodeps.config import RepositorySpec
from repodeps.core.manifest.models import ManifestRecord
from repodeps.exceptions import FetchError, ManifestParseError
from repodeps.sources.cargo import MANIFEST_FILENAME, parse_manifest_tree

logger = logging.getLogger(__name__)

# Timeout for tarball downloads (seconds).
DEFAULT_TIMEOUT: float = 120.0

# User-Agent sent with every request.
USER_AGENT: str = "repodeps/0.1"

_SKIPPED_DIRS = frozenset({"target", ".git"})


@dataclass
class RepositorySnapshot:
    """The manifests found in one repository.

    Attributes:
        name: Repository name.
        manifests: Package manifests, sorted by path.
    """

    name: str
    manifests: list[ManifestRecord] = field(default_factory=list)


def _is_manifest_path(parts: tuple[str, ...]) -> bool:
    return (
        bool(parts)
        and parts[-1] == MANIFEST_FILENAME
        and not _SKIPPED_DIRS.intersection(parts[:-1])
    )


def _decode(raw: bytes, source: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestParseError(f"{source} is not valid UTF-8") from exc


def read_directory(root: Path) -> dict[Path, str]:
    """Collect manifest texts under a local directory, keyed by relative path."""
    if not root.is_dir():
        raise FetchError(f"Repository directory {root} does not exist")
    files: dict[Path, str] = {}
    for path in sorted(root.rglob(MANIFEST_FILENAME)):
        rel = path.relative_to(root)
        if not _is_manifest_path(rel.parts):
            continue
        try:
            files[rel] = _decode(path.read_bytes(), str(path))
        except OSError as exc:
            raise FetchError(f"Failed to read {path}: {exc}") from exc
    return files


def read_tarball(data: bytes, source: str) -> dict[Path, str]:
    """Collect manifest texts from an (optionally compressed) tar archive."""
    files: dict[Path, str] = {}
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as archive:
            for member in archive:
                parts = PurePosixPath(member.name).parts
                if not member.isfile() or not _is_manifest_path(parts):
                    continue
                handle = archive.extractfile(member)
                if handle is None:
                    continue
                files[Path(*parts)] = _decode(handle.read(), f"{source}:{member.name}")
    except (tarfile.TarError, EOFError, OSError) as exc:
        raise FetchError(f"Failed to read the archive downloaded from {source}: {exc}") from exc
    return files


def load_local(spec: RepositorySpec) -> RepositorySnapshot:
    """Load a repository from a local directory or tarball.

    Raises:
        FetchError: If the location is missing or unreadable.
        ManifestParseError: If a manifest is malformed.
    """
    path = Path(spec.location)
    if path.is_dir():
        files = read_directory(path)
    elif path.is_file():
        try:
            files = read_tarball(path.read_bytes(), spec.location)
        except OSError as exc:
            raise FetchError(f"Failed to read {path}: {exc}") from exc
    else:
        raise FetchError(f"Repository {spec.name}: {spec.location} does not exist")

    snapshot = RepositorySnapshot(spec.name, parse_manifest_tree(files, repository=spec.name))
    logger.info("Loaded %d package(s) from %s", len(snapshot.manifests), spec.name)
    return snapshot


def _parse_tarball(spec: RepositorySpec, data: bytes) -> RepositorySnapshot:
    files = read_tarball(data, spec.location)
    return RepositorySnapshot(spec.name, parse_manifest_tree(files, repository=spec.name))


async def download(
    client: httpx.AsyncClient, url: str, *, token: str | None = None
) -> bytes:
    """Download ``url`` and return the body.

    Raises:
        FetchError: On timeouts, transport errors or non-2xx responses.
    """
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    try:
        resp = await client.get(url, headers=headers)
        resp.raise_for_status()
    except httpx.TimeoutException as exc:
        raise FetchError(f"Timeout downloading {url}") from exc
    except httpx.HTTPStatusError as exc:
        raise FetchError(f"HTTP {exc.response.status_code} from {url}") from exc
    except httpx.RequestError as exc:
        raise FetchError(f"Failed to download {url}: {exc}") from exc
    return resp.content


async def load_remote(
    client: httpx.AsyncClient, spec: RepositorySpec, *, token: str | None = None
) -> RepositorySnapshot:
    """Download and parse a remote tarball repository."""
    logger.info("Downloading %s", spec.location)
    data = await download(client, spec.location, token=token)
    snapshot = await asyncio.to_thread(_parse_tarball, spec, data)
    logger.info("Loaded %d package(s) from %s", len(snapshot.manifests), spec.name)
    return snapshot


async def fetch_all_async(
    specs: list[RepositorySpec],
    *,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[RepositorySnapshot]:
    """Load every repository concurrently.

    Args:
        specs: Repositories to load.
        token: Bearer token for remote downloads.
        transport: Custom httpx transport (tests use ``httpx.MockTransport``).
        timeout: Per-request timeout in seconds.

    Returns:
        Snapshots sorted by repository name.
    """
    async with httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        transport=transport,
    ) as client:
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(
                        load_remote(client, spec, token=token) if spec.is_remote
                        else asyncio.to_thread(load_local, spec)
                    )
                    for spec in specs
                ]
        except ExceptionGroup as exc:
            # The first failure has cancelled the other fetches; report it alone.
            raise exc.exceptions[0]
    return sorted((task.result() for task in tasks), key=lambda s: s.name)


def fetch_all(
    specs: list[RepositorySpec],
    *,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[RepositorySnapshot]:
    """Synchronous wrapper around ``fetch_all_async``."""
    return asyncio.run(fetch_all_async(specs, token=token, transport=transport))
