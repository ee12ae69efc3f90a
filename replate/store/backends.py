"""
Document store backends - raw persistence for one collection of JSON records.
Challenge: Two very different stores (a local JSON array file, a spreadsheet web app)
behind the same GET-all / APPEND / DELETE-by-id contract, never blocking forever.
Design: Backends know nothing about listings or users; field names pass through untouched.
"""

import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import httpx

from replate.core.exceptions import StoreUnavailable, StoreWriteError

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class StoreBackend(ABC):
    """One collection in a document store."""

    @abstractmethod
    async def fetch_all(self) -> list[Record]:
        """All records, in storage order."""

    @abstractmethod
    async def add(self, record: Record) -> None:
        """Append one record."""

    @abstractmethod
    async def delete(self, record_id: str, id_field: str = "id") -> None:
        """Remove every record whose id_field equals record_id (string compare)."""


class JsonFileBackend(StoreBackend):
    """Collection stored as a JSON array in a single file. Writes replace the file atomically."""

    def __init__(self, path: str | Path, timeout: float = 10.0):
        self.path = Path(path)
        self.timeout = timeout
        # Held from the start of a file operation until its worker thread returns
        self._io_lock = asyncio.Lock()

    def _read(self) -> list[Record]:
        if not self.path.exists():
            return []
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return []
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError("expected a JSON array")
        return data

    def _write(self, records: list[Record]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", dir=self.path.parent, delete=False, encoding="utf-8", suffix=".tmp"
        ) as tf:
            json.dump(records, tf, indent=2, ensure_ascii=False)
            temp_path = Path(tf.name)
        try:
            os.replace(temp_path, self.path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    async def _run(self, fn, *args):
        """
        Blocking file I/O off the event loop, bounded by the store timeout.
        A timed-out thread keeps running; the I/O lock is only released once it returns.
        """
        await asyncio.wait_for(self._io_lock.acquire(), timeout=self.timeout)
        worker = asyncio.create_task(asyncio.to_thread(fn, *args))
        worker.add_done_callback(self._release_io)
        return await asyncio.wait_for(asyncio.shield(worker), timeout=self.timeout)

    def _release_io(self, worker: asyncio.Task) -> None:
        self._io_lock.release()
        if not worker.cancelled() and worker.exception() is not None:
            logger.debug("File operation on %s ended with %r", self.path, worker.exception())

    async def fetch_all(self) -> list[Record]:
        try:
            return await self._run(self._read)
        except asyncio.TimeoutError as e:
            raise StoreUnavailable(f"timed out reading {self.path}") from e
        except (OSError, ValueError) as e:
            # A corrupt file must not be treated as empty, or the next write would wipe it
            raise StoreUnavailable(f"cannot read {self.path}: {e}") from e

    async def _replace(self, records: list[Record]) -> None:
        try:
            await self._run(self._write, records)
        except asyncio.TimeoutError as e:
            raise StoreWriteError(f"timed out writing {self.path}") from e
        except (OSError, TypeError, ValueError) as e:
            raise StoreWriteError(f"cannot write {self.path}: {e}") from e

    async def add(self, record: Record) -> None:
        records = await self.fetch_all()
        records.append(record)
        await self._replace(records)

    async def delete(self, record_id: str, id_field: str = "id") -> None:
        records = await self.fetch_all()
        kept = [r for r in records if str(r.get(id_field)) != record_id]
        await self._replace(kept)


class SheetBackend(StoreBackend):
    """
    Collection in a spreadsheet web app (e.g. a Google Apps Script deployment).
    Protocol: GET ?action=get&sheet=S -> JSON array;
    POST ?action=add&sheet=S with a JSON body -> {"success": true};
    POST ?action=delete&sheet=S&id=N -> {"success": true}.
    """

    def __init__(self, client: httpx.AsyncClient, url: str, sheet: str, timeout: float = 10.0):
        self.client = client
        self.url = url
        self.sheet = sheet
        self.timeout = timeout

    async def _request(self, method: str, action: str, params: dict | None = None, **kwargs) -> httpx.Response:
        query = {"action": action, "sheet": self.sheet, **(params or {})}
        try:
            return await self.client.request(
                method, self.url, params=query, timeout=self.timeout, **kwargs
            )
        except httpx.TimeoutException as e:
            raise StoreUnavailable(f"sheet {self.sheet!r}: {action} timed out") from e
        except httpx.HTTPError as e:
            raise StoreUnavailable(f"sheet {self.sheet!r}: {action} failed: {e!r}") from e

    async def fetch_all(self) -> list[Record]:
        response = await self._request("GET", "get")
        if response.is_error:
            raise StoreUnavailable(f"sheet {self.sheet!r}: get returned {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            # An unparseable body is an unreadable store, never an empty one
            raise StoreUnavailable(f"sheet {self.sheet!r}: get returned a non-JSON body") from e
        # Some deployments wrap rows as {"data": [...]}
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            data = data["data"]
        if not isinstance(data, list):
            raise StoreUnavailable(f"sheet {self.sheet!r}: get returned {type(data).__name__}, not an array")
        return [row for row in data if isinstance(row, dict)]

    async def _write(self, action: str, **kwargs) -> None:
        response = await self._request("POST", action, **kwargs)
        if response.is_error:
            raise StoreWriteError(f"sheet {self.sheet!r}: {action} returned {response.status_code}")
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict) or not body.get("success"):
            raise StoreWriteError(f"sheet {self.sheet!r}: {action} not acknowledged: {response.text[:200]}")

    async def add(self, record: Record) -> None:
        await self._write("add", json=record)

    async def delete(self, record_id: str, id_field: str = "id") -> None:
        await self._write("delete", params={"id": record_id})
