"""Background task that periodically sweeps expired cache entries."""

import asyncio
import logging

from tubecache.infrastructure.cache.store import CacheStore

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 120.0


class CacheSweeper:
    """Runs ``CacheStore.sweep()`` on a fixed interval, independent of traffic.

    Usage:
        sweeper = CacheSweeper(store, interval=120.0)

        async with sweeper:
            # Sweeps run in the background
            await serve()
        # Sweep task is stopped
    """

    def __init__(self, store: CacheStore, interval: float = DEFAULT_SWEEP_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._store = store
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._shutdown = False
        self._sweeps = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def sweeps(self) -> int:
        """Completed sweep passes since start."""
        return self._sweeps

    def start(self) -> asyncio.Task:
        """Start the sweep loop in a background task.

        Returns:
            The asyncio.Task running the loop.
        """
        if self.running:
            raise RuntimeError("CacheSweeper is already running")

        self._shutdown = False
        self._task = asyncio.create_task(self._run(), name="cache-sweeper")
        logger.info("Cache sweeper started (interval=%ss)", self._interval)
        return self._task

    async def stop(self) -> None:
        """Stop the sweep loop and wait for it to exit."""
        self._shutdown = True
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Cache sweeper stopped")

    async def _run(self) -> None:
        while not self._shutdown:
            try:
                await asyncio.sleep(self._interval)
                if self._shutdown:
                    break
                self._store.sweep()
                self._sweeps += 1
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Cache sweep failed: {e}")

    async def __aenter__(self) -> "CacheSweeper":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.stop()
