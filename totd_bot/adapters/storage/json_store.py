"""JSON file-backed Track of the Day cache."""

import asyncio
import json
import os
import sys
import tempfile
import time
from pathlib import Path
from typing import Awaitable, Callable, Optional

from totd_bot.domain.models import CacheRecord


def _log(msg: str):
    print(msg, file=sys.stderr)


class TotdCache:
    """Single-record cache with staleness detection.

    ``get_fresh`` reads the stored record and, when it has expired (or the
    file does not exist yet), awaits ``recompute``, overwrites the file and
    returns what was re-read from disk. Refreshes are serialized per
    instance; every reader of one file must share the same TotdCache.
    """

    def __init__(self, path: str = "totd.json", clock: Callable[[], float] = time.time):
        self._path = Path(path)
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def get_fresh(self, recompute: Callable[[], Awaitable[CacheRecord]]) -> CacheRecord:
        async with self._lock:
            record = await self.read()
            if record is not None and not record.is_stale(self._clock()):
                return record

            reason = "missing" if record is None else f"stale (ended {record.end_timestamp})"
            _log(f"[TotdCache] {self._path} {reason}, refreshing")
            await self.write(await recompute())
            refreshed = await self.read()
            if refreshed is None:
                raise RuntimeError(f"cache file vanished after write: {self._path}")
            return refreshed

    async def read(self) -> Optional[CacheRecord]:
        """Return the stored record, or None when no file exists yet."""
        return await asyncio.to_thread(self._read_sync)

    async def write(self, record: CacheRecord) -> None:
        await asyncio.to_thread(self._write_sync, record)

    def _read_sync(self) -> Optional[CacheRecord]:
        if not self._path.exists():
            return None
        raw = json.loads(self._path.read_text(encoding="utf-8"))
        return CacheRecord.from_dict(raw)

    def _write_sync(self, record: CacheRecord) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(record.to_dict(), ensure_ascii=False, indent=2)
        # Atomic write
        fd, tmp_path = tempfile.mkstemp(dir=str(self._path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, str(self._path))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
