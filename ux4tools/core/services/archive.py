"""
Archive installer — extract a zip buffer into a directory.

Entries are produced lazily by :func:`iter_entries` and consumed one
at a time by :func:`extract`, so memory stays bounded by a single entry
and progress is reported in archive order.
"""

from __future__ import annotations

import io
import logging
import shutil
import zipfile
import zlib
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import IO

from ux4tools.core.errors import ArchiveWriteError, CorruptArchive

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

_CHUNK = 64 * 1024


@dataclass(frozen=True)
class ArchiveEntry:
    """One entry of an archive.

    ``open`` returns a readable binary stream of the uncompressed bytes.
    Directory entries never have it called.
    """

    name: str
    open: Callable[[], IO[bytes]]

    @property
    def is_dir(self) -> bool:
        return self.name.endswith("/")


def iter_entries(archive: bytes) -> tuple[int, Iterator[ArchiveEntry]]:
    """Open a zip buffer and return (entry_count, lazy entry iterator).

    The iterator is finite and not restartable.

    Raises:
        CorruptArchive: If the buffer is not a valid zip archive.
    """
    try:
        zf = zipfile.ZipFile(io.BytesIO(archive))
    except (zipfile.BadZipFile, ValueError) as e:
        raise CorruptArchive(f"Invalid archive: {e}") from e

    infos = zf.infolist()

    def _generate() -> Iterator[ArchiveEntry]:
        with zf:
            for info in infos:
                yield ArchiveEntry(
                    name=info.filename.replace("\\", "/"),
                    open=lambda info=info: zf.open(info),
                )

    return len(infos), _generate()


def _safe_target(destination: Path, name: str) -> Path:
    """Resolve an entry name under destination, rejecting escapes."""
    rel = PurePosixPath(name)
    if rel.is_absolute() or ".." in rel.parts:
        raise ArchiveWriteError(f"Refusing to extract entry outside destination: {name}")
    return destination.joinpath(*rel.parts)


def write_entries(
    entries: Iterable[ArchiveEntry],
    destination: Path,
    total: int,
    on_progress: ProgressCallback | None = None,
) -> int:
    """Write entries sequentially under destination.

    Stops on the first failure. Entries already written stay on disk.

    Returns:
        Number of entries processed.
    """
    processed = 0
    for entry in entries:
        target = _safe_target(destination, entry.name)
        try:
            if entry.is_dir:
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                with entry.open() as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst, _CHUNK)
        except (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError) as e:
            raise CorruptArchive(f"Cannot read entry {entry.name}: {e}") from e
        except OSError as e:
            raise ArchiveWriteError(f"Cannot write {target}: {e}") from e

        processed += 1
        if on_progress is not None:
            on_progress(processed, total)

    return processed


def extract(
    archive: bytes,
    destination: Path,
    on_progress: ProgressCallback | None = None,
) -> int:
    """Extract a zip buffer into destination.

    Args:
        archive: Raw zip bytes.
        destination: Directory to extract into (created if missing).
        on_progress: Called after each entry with (processed, total).

    Returns:
        Number of entries extracted.

    Raises:
        CorruptArchive: The buffer or an entry cannot be decoded.
        ArchiveWriteError: An entry cannot be written.
    """
    total, entries = iter_entries(archive)
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ArchiveWriteError(f"Cannot create {destination}: {e}") from e

    logger.debug("Extracting %d entries into %s", total, destination)
    count = write_entries(entries, destination, total, on_progress)
    logger.info("Extracted %d of %d entries into %s", count, total, destination)
    return count
