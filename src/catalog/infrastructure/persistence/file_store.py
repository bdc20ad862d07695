"""JSON array files under a data directory.

Blocking file calls run in a worker thread so the event loop only
suspends at I/O boundaries. A failed call is never retried; it surfaces
as FileOperationError and the caller decides what it means.
"""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class FileOperationError(Exception):
    """An I/O or parse failure on a data file; the cause is chained."""


class JsonFileStore:

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, filename: str) -> Path:
        return self._data_dir / filename

    # --- Public coroutines ----------------------------------------------------

    async def read(self, filename: str) -> list[Any]:
        """Return the records in *filename*, or ``[]`` if missing or blank.

        Content that parses to something other than a JSON array also
        yields ``[]``.
        """
        try:
            return await asyncio.to_thread(self._read_sync, self.path_for(filename))
        except (OSError, ValueError) as exc:
            raise FileOperationError(
                f"Error reading JSON file {filename}: {exc}"
            ) from exc

    async def write(self, filename: str, records: list[Any]) -> None:
        """Overwrite *filename* with *records*, creating directories as needed."""
        try:
            await asyncio.to_thread(self._write_sync, self.path_for(filename), records)
        except (OSError, TypeError, ValueError) as exc:
            raise FileOperationError(
                f"Error writing JSON file {filename}: {exc}"
            ) from exc

    async def exists(self, filename: str) -> bool:
        return await asyncio.to_thread(self.path_for(filename).is_file)

    async def backup(self, filename: str) -> Path | None:
        """Copy *filename* to ``<filename>.backup.<epoch-millis>`` beside it.

        A backup taken in the same millisecond as an earlier one gets a
        ``-1``, ``-2``, ... suffix instead of replacing it. Returns the
        backup path, or None when there is nothing to back up.
        """
        source = self.path_for(filename)
        try:
            if not await self.exists(filename):
                return None
            target = await asyncio.to_thread(self._backup_sync, source, _now_millis())
        except OSError as exc:
            raise FileOperationError(
                f"Error creating backup for {filename}: {exc}"
            ) from exc
        logger.info("Backed up %s to %s", source, target.name)
        return target

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _read_sync(path: Path) -> list[Any]:
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        if not content.strip():
            return []
        parsed = json.loads(content)
        return parsed if isinstance(parsed, list) else []

    @staticmethod
    def _backup_sync(source: Path, stamp: int) -> Path:
        base = f"{source.name}.backup.{stamp}"
        target = source.with_name(base)
        attempt = 0
        with source.open("rb") as src:
            while True:
                try:
                    with target.open("xb") as dst:
                        shutil.copyfileobj(src, dst)
                    return target
                except FileExistsError:
                    attempt += 1
                    target = source.with_name(f"{base}-{attempt}")

    @staticmethod
    def _write_sync(path: Path, records: list[Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")


def _now_millis() -> int:
    return int(time.time() * 1000)
