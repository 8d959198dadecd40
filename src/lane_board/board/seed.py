# src/lane_board/board/seed.py

from __future__ import annotations

"""
Seed data loader.

Used once at startup when the storage slot is empty. The source is either an
http(s) URL (fetched with httpx) or a local JSON file such as the bundled
asset. Any failure yields SeedResult.failure and the board starts empty.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from .persistence import decode_tasks
from .task_models import Task

logger = logging.getLogger(__name__)

BUNDLED_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "tasks.json"


@dataclass(frozen=True, slots=True)
class SeedResult:
    ok: bool
    tasks: list[Task] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def success(cls, tasks: list[Task]) -> SeedResult:
        return cls(ok=True, tasks=list(tasks))

    @classmethod
    def failure(cls, error: str) -> SeedResult:
        return cls(ok=False, tasks=[], error=error)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def _read_remote(source: str, client: httpx.AsyncClient | None) -> object:
    if client is not None:
        resp = await client.get(source)
        resp.raise_for_status()
        return resp.json()

    async with httpx.AsyncClient() as own_client:
        resp = await own_client.get(source)
        resp.raise_for_status()
        return resp.json()


def _read_local(source: str | Path) -> object:
    return json.loads(Path(source).expanduser().read_text("utf-8"))


async def fetch_seed(
    source: str | Path,
    *,
    client: httpx.AsyncClient | None = None,
) -> SeedResult:
    """
    Fetch seed records from `source` and decode them.

    Never raises: transport errors, HTTP errors, bad JSON and a non-array
    payload all become SeedResult.failure.
    """
    src = str(source)
    try:
        if _is_url(src):
            payload = await _read_remote(src, client)
        else:
            payload = await asyncio.to_thread(_read_local, src)
    except httpx.HTTPError as e:
        logger.warning("Seed fetch failed source=%s: %s", src, e)
        return SeedResult.failure(f"http error: {e}")
    except (OSError, ValueError, RecursionError) as e:
        logger.warning("Seed read failed source=%s: %s", src, e)
        return SeedResult.failure(f"read error: {e}")

    if not isinstance(payload, list):
        logger.warning("Seed payload from %s is not a JSON array", src)
        return SeedResult.failure("payload is not a JSON array")

    tasks = decode_tasks(payload, origin=f"seed:{src}")
    logger.info("Seed loaded source=%s tasks=%d", src, len(tasks))
    return SeedResult.success(tasks)


class SeedLoader:
    """
    One-shot seed fetch.

    The first call to load()/start() performs the fetch; later calls get the
    same SeedResult. start() runs the fetch as a background asyncio task and
    invokes `on_done` exactly once with the result.
    """

    def __init__(
        self,
        source: str | Path = BUNDLED_SEED_PATH,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._source = source
        self._client = client
        self._result: SeedResult | None = None
        self._pending: asyncio.Task[SeedResult] | None = None

    @property
    def source(self) -> str | Path:
        return self._source

    @property
    def result(self) -> SeedResult | None:
        return self._result

    async def _run(self) -> SeedResult:
        result = await fetch_seed(self._source, client=self._client)
        self._result = result
        return result

    async def load(self) -> SeedResult:
        if self._result is not None:
            return self._result
        if self._pending is None:
            self._pending = asyncio.create_task(self._run())
        return await self._pending

    def start(self, on_done: Callable[[SeedResult], None]) -> asyncio.Task[SeedResult]:
        """Schedule the fetch on the running loop; `on_done` gets the result once."""

        async def _runner() -> SeedResult:
            result = await self.load()
            try:
                on_done(result)
            except Exception:
                logger.exception("Seed completion callback failed.")
            return result

        return asyncio.create_task(_runner())
