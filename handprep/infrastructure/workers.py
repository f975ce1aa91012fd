from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..config import DEFAULT_SETTINGS, SETTINGS, PipelineSettings
from ..errors import PipelineError
from ..processing.decode import ImageSource
from ..processing.pipeline import process

logger = logging.getLogger(__name__)

ExecutorFactory = Callable[[int], Executor]


def _thread_pool(max_workers: int) -> Executor:
    return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="handprep")


@dataclass(frozen=True)
class PipelineResult:
    data: Optional[bytes] = None
    error: Optional[PipelineError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PipelineWorkers:
    """Runs :func:`~handprep.processing.pipeline.process` off the caller's thread.

    Each submission owns its input and output, so any number can run at once.
    Dropping a returned future is enough to abandon a job; the pipeline has no
    side effects to roll back.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        settings: PipelineSettings = DEFAULT_SETTINGS,
        executor_factory: ExecutorFactory | None = None,
    ) -> None:
        self.settings = settings
        self._max_workers = max_workers or SETTINGS.workers
        self._executor_factory = executor_factory or _thread_pool
        self._executor: Executor | None = None
        self._lock = threading.Lock()

    def _get_executor(self) -> Executor:
        with self._lock:
            if self._executor is None:
                self._executor = self._executor_factory(self._max_workers)
            return self._executor

    def submit(self, source: ImageSource) -> "Future[bytes]":
        if isinstance(source, memoryview):
            source = bytes(source)
        return self._get_executor().submit(process, source, self.settings)

    def process_many(self, sources: Iterable[ImageSource]) -> List[PipelineResult]:
        futures = [self.submit(source) for source in sources]
        results: List[PipelineResult] = []
        for index, future in enumerate(futures):
            try:
                results.append(PipelineResult(data=future.result()))
            except PipelineError as exc:
                logger.info("Batch item %d failed: %s", index, exc.message)
                results.append(PipelineResult(error=exc))
        return results

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def __enter__(self) -> "PipelineWorkers":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()


WORKERS = PipelineWorkers()
