"""Single-flight memoization for repeated analytics requests."""

from concurrent.futures import Future
from datetime import date
from enum import Enum
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple
import hashlib
import json
import logging

logger = logging.getLogger(__name__)


def _canonical(value: Any) -> Any:
    """Render a key part as JSON-safe data with a fixed ordering."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(_canonical(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in sorted(value.items(), key=lambda kv: str(kv[0]))}
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    fingerprint = getattr(value, 'fingerprint', None)
    if fingerprint is not None:
        return fingerprint
    raise TypeError(f"Cannot build a memo key from {type(value).__name__}")


def canonical_key(*parts: Any) -> str:
    """
    Hash key parts into a stable memo key.

    Sets are sorted, dates rendered as ISO strings and scoring
    configurations replaced by their fingerprint, so equal inputs always
    produce equal keys.
    """
    payload = json.dumps([_canonical(p) for p in parts], sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()


class SingleFlightMemo:
    """Read-through memo computing each key at most once at a time.

    Concurrent callers of the same key wait on the in-flight Future.
    Failed computations are dropped so a later call retries them. With
    ``max_entries`` set, the least recently used completed entries are
    evicted once the memo grows past it; in-flight entries are never
    evicted.
    """

    def __init__(self, max_entries: Optional[int] = None):
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self._lock = Lock()
        self._entries: Dict[str, Future] = {}
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> Any:
        with self._lock:
            future = self._entries.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._entries[key] = future
                self.misses += 1
                self._evict()
            else:
                # Most recently used entries sit at the end
                self._entries[key] = self._entries.pop(key)
                self.hits += 1

        if not owner:
            return future.result()

        try:
            result = compute()
        except BaseException as e:
            with self._lock:
                if self._entries.get(key) is future:
                    del self._entries[key]
            future.set_exception(e)
            raise

        future.set_result(result)
        return result

    def _evict(self):
        if self.max_entries is None:
            return
        for key in [k for k, f in self._entries.items() if f.done()]:
            if len(self._entries) <= self.max_entries:
                break
            del self._entries[key]

    def __contains__(self, key: str) -> bool:
        with self._lock:
            future = self._entries.get(key)
            return future is not None and future.done() and future.exception() is None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Tuple[int, int]:
        """(hits, misses)."""
        with self._lock:
            return self.hits, self.misses

    def clear(self):
        """Drop all completed entries."""
        with self._lock:
            self._entries = {k: f for k, f in self._entries.items() if not f.done()}
        logger.info("Cleared analytics memo")
