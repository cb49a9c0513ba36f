"""
Hiring Notifier Backend — Record Store
=======================================

What:  File-backed persistence for the two collections, `applications` and
       `teams`, each stored as one JSON array.
How:   Whole-collection reads and writes with aiofiles. Every write goes to a
       sibling `.tmp` file that is then moved over the target, so a reader
       never sees a half-written collection.
Who:   Owned by the FastAPI app (created in `create_app`); passed to
       TeamDirectory and ApplicationRepository. Nothing else touches data/.
When:  Initialized on first use and again, eagerly, at startup.

Layout:
    data/
    ├── applications.json   → []                      on first use
    └── teams.json          → Engineering/Product/Marketing seed teams

Read-Modify-Write:
    `modify(name)` holds one asyncio.Lock per collection while the caller
    mutates the loaded list, then writes it back. Two concurrent submissions
    therefore append one after the other instead of overwriting each other.

Failure Modes:
    ┌──────────────────────────────┬──────────────────────────────────────┐
    │ Situation                    │ Result                               │
    ├──────────────────────────────┼──────────────────────────────────────┤
    │ file missing                 │ empty collection                     │
    │ unreadable/malformed (read)  │ logged, empty collection             │
    │ unreadable/malformed (modify)│ StorageError, file left untouched    │
    │ write fails                  │ StorageError                         │
    └──────────────────────────────┴──────────────────────────────────────┘
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List

import aiofiles
import aiofiles.os

from hiring_notifier.exceptions import StorageError
from hiring_notifier.models.team import default_teams

logger = logging.getLogger(__name__)

APPLICATIONS = "applications"
TEAMS = "teams"

Record = Dict[str, Any]


class RecordStore:
    """
    Reads and writes named collections as whole JSON documents.

    Each collection maps to `<data_dir>/<name>.json`. Records are plain
    dicts with camelCase keys; converting them to entities is the job of
    the repositories.
    """

    COLLECTIONS = (APPLICATIONS, TEAMS)

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir).resolve()
        self._locks: Dict[str, asyncio.Lock] = {name: asyncio.Lock() for name in self.COLLECTIONS}
        self._init_lock = asyncio.Lock()
        self._initialized = False

    def path_for(self, name: str) -> Path:
        if name not in self.COLLECTIONS:
            raise StorageError(
                message=f"Unknown collection '{name}'",
                context={"collection": name},
            )
        return self.data_dir / f"{name}.json"

    # ── Initialization ────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """
        Create the data directory and any missing collection files.

        applications.json starts empty; teams.json starts with the three
        seed teams. Existing files are never modified. Safe to call twice.
        """
        async with self._init_lock:
            if self._initialized:
                return
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.error("Failed to create data directory %s: %s", self.data_dir, e)
                raise StorageError(
                    message="Failed to initialize data storage",
                    cause=str(e),
                    context={"path": str(self.data_dir)},
                )

            seeds = {
                APPLICATIONS: [],
                TEAMS: [team.to_record() for team in default_teams()],
            }
            for name, records in seeds.items():
                if not await aiofiles.os.path.exists(self.path_for(name)):
                    await self._write(name, records)
                    logger.info("Initialized collection '%s' with %d records", name, len(records))

            self._initialized = True
            logger.info("Record store ready at %s", self.data_dir)

    async def _ensure_initialized(self) -> None:
        if not self._initialized:
            await self.initialize()

    # ── Public API ────────────────────────────────────────────────────────

    async def load_collection(self, name: str) -> List[Record]:
        """
        Return every record of a collection, in storage order.

        A missing or unreadable file yields an empty list (the failure is
        logged) so that listing endpoints stay available.
        """
        await self._ensure_initialized()
        return await self._read(name, strict=False)

    async def save_collection(self, name: str, records: List[Record]) -> None:
        """Replace a collection with `records`. Raises StorageError on failure."""
        await self._ensure_initialized()
        async with self._locks[name]:
            await self._write(name, records)

    @asynccontextmanager
    async def modify(self, name: str) -> AsyncIterator[List[Record]]:
        """
        Locked read-modify-write cycle over one collection.

        Usage:
            async with store.modify("teams") as teams:
                teams.append(record)

        The list is written back when the block exits normally. If the block
        raises, nothing is written and the exception propagates.
        """
        await self._ensure_initialized()
        path = self.path_for(name)
        async with self._locks[name]:
            records = await self._read(name, strict=True)
            yield records
            await self._write(name, records)
            logger.debug("Collection '%s' rewritten (%d records) at %s", name, len(records), path.name)

    # ── File I/O ──────────────────────────────────────────────────────────

    async def _read(self, name: str, strict: bool) -> List[Record]:
        path = self.path_for(name)
        if not await aiofiles.os.path.exists(path):
            return []

        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
            data = json.loads(raw) if raw.strip() else []
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return data
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            if strict:
                logger.error("Error reading collection '%s' from %s: %s", name, path, e)
                raise StorageError(
                    message=f"Failed to read {name}",
                    cause=str(e),
                    context={"collection": name, "path": str(path)},
                )
            logger.error("Error reading collection '%s': %s (treating as empty)", name, e)
            return []

    async def _write(self, name: str, records: List[Record]) -> None:
        path = self.path_for(name)
        tmp_path = path.with_suffix(".tmp")
        try:
            payload = json.dumps(records, indent=2, ensure_ascii=False)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write collection '%s' to %s: %s", name, path, e)
            raise StorageError(
                message=f"Failed to save {name}",
                cause=str(e),
                context={"collection": name, "path": str(path)},
            )
