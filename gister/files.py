from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from typing import Iterable, Union

import aiofiles

from .debug import make_debug_logger
from .errors import FileReadErrors

dbg = make_debug_logger("files")


@dataclass(frozen=True)
class FileRecord:
    name: str  # base filename, used as the gist file key
    content: str


@dataclass
class CollectedFiles:
    """Outcome of reading a batch of paths.

    `files` holds every record that was read, keyed by base filename.
    `failures` maps each unreadable path to its reason and is empty when
    every read succeeded.
    """
    files: dict[str, FileRecord] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)
    read_paths: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise FileReadErrors(self.failures)


# Upper bound on files held open at once while collecting
MAX_OPEN_FILES = 32


async def read_file(path: str) -> FileRecord:
    """Read one path into a FileRecord. Raises OSError if unreadable."""
    async with aiofiles.open(path, "rb") as f:
        raw = await f.read()
    return FileRecord(name=os.path.basename(path), content=raw.decode("utf-8", errors="replace"))


async def _try_read(path: str, limit: asyncio.Semaphore) -> Union[FileRecord, str]:
    async with limit:
        try:
            return await read_file(path)
        except OSError as e:
            return e.strerror or str(e)
        except (ValueError, TypeError) as e:
            # e.g. a path with an embedded null byte
            return str(e)


async def collect_files(paths: Iterable[str], max_open: int = MAX_OPEN_FILES) -> CollectedFiles:
    """Read every path concurrently; a failure never aborts the batch.

    At most `max_open` files are open at the same time. Outcomes are
    folded in input order, so when two paths share a base filename the
    later one wins.
    """
    paths = list(paths)
    limit = asyncio.Semaphore(max_open)
    outcomes = await asyncio.gather(*(_try_read(p, limit) for p in paths))
    collected = CollectedFiles()
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, FileRecord):
            if outcome.name in collected.files:
                dbg(f"{path} overwrites earlier file named {outcome.name}")
            collected.files[outcome.name] = outcome
            collected.read_paths.append(path)
        else:
            dbg(f"failed to read {path}: {outcome}")
            collected.failures[path] = outcome
    return collected


async def must_collect_files(paths: Iterable[str]) -> dict[str, FileRecord]:
    """Collect files, raising FileReadErrors if any path failed."""
    collected = await collect_files(paths)
    collected.raise_for_failures()
    return collected.files


__all__ = [
    "FileRecord",
    "CollectedFiles",
    "read_file",
    "collect_files",
    "must_collect_files",
]
