"""Thread fan-out for independent per-player computations."""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, TypeVar
import logging

from ..config.analytics_config import PARALLEL_CONFIG, ParallelConfig

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


def fan_out(fn: Callable[[T], R], items: Sequence[T],
            max_workers: Optional[int] = None,
            config: ParallelConfig = PARALLEL_CONFIG) -> List[R]:
    """
    Apply ``fn`` to every item, possibly across worker threads.

    Args:
        fn: Pure function of one item
        items: Inputs; output order matches this order
        max_workers: Thread cap (defaults to config)
        config: Parallel settings

    Returns:
        Results in input order

    Raises:
        The first exception raised by ``fn``, in input order.
    """
    items = list(items)
    workers = max_workers or config.MAX_WORKERS

    if workers <= 1 or len(items) < config.MIN_PARALLEL_ITEMS:
        return [fn(item) for item in items]

    logger.debug(f"Fanning out {len(items)} items over {workers} workers")
    with ThreadPoolExecutor(max_workers=min(workers, len(items))) as executor:
        futures = [executor.submit(fn, item) for item in items]
        return [future.result() for future in futures]
