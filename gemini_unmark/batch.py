"""Image-level parallelism: one image per worker, shared engine and cache."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from .errors import WatermarkError

logger = logging.getLogger(__name__)


@dataclass
class BatchItem:
    pixels: Any
    override: Any = None
    name: str = ""


@dataclass
class BatchResult:
    item: BatchItem
    pixels: Optional[Any] = None
    success: bool = False
    error_message: str = ""


def parallel_map(func, items, workers=None):
    """func over items on a thread pool, results in input order."""
    items = list(items)
    if not items:
        return []
    if workers == 1 or len(items) == 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(func, items))


def remove_batch(engine, items: Iterable[BatchItem], workers: Optional[int] = None,
                 on_result: Optional[Callable[[BatchResult], None]] = None) -> List[BatchResult]:
    """
    Run engine.remove over every item.

    A failing item is recorded in its BatchResult and does not stop the rest.
    """
    def run(item):
        result = BatchResult(item=item)
        try:
            result.pixels = engine.remove(item.pixels, override=item.override)
            result.success = True
        except WatermarkError as e:
            logger.warning("Failed to process %s: %s", item.name or "image", e)
            result.error_message = str(e)
        if on_result is not None:
            on_result(result)
        return result

    return parallel_map(run, items, workers)
