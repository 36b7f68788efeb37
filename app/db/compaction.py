import asyncio
import logging
from typing import List, Sequence

from app.core.errors import StorageFault
from app.db.repositories.base import EntityStore

logger = logging.getLogger(__name__)


class CompactionScheduler:
    """Периодическое сжатие коллекций, у каждой свой таймер"""

    def __init__(self, stores: Sequence[EntityStore], interval_seconds: float):
        self.stores = list(stores)
        self.interval_seconds = interval_seconds
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        if self.interval_seconds <= 0 or self._tasks:
            return
        for store in self.stores:
            task = asyncio.create_task(self._run(store), name=f"compact-{store.collection}")
            self._tasks.append(task)
        logger.info(f"Compaction scheduled every {self.interval_seconds}s for {len(self.stores)} collections")

    async def _run(self, store: EntityStore) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await store.compact()
            except StorageFault:
                # следующая попытка - по расписанию
                logger.exception(f"Compaction of {store.collection} failed")

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
