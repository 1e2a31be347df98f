from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Hashable, Optional, Tuple

from .bonds import BondParameters
from .ytm import YieldResult

logger = logging.getLogger(__name__)


class YieldCache:
    """
    Explicit memo of yield results keyed on the exact input tuple.

    Entries are recomputed only when the key differs. With `maxsize`, the oldest
    entry is evicted first.
    """

    def __init__(self, maxsize: Optional[int] = None):
        if maxsize is not None and maxsize <= 0:
            raise ValueError("maxsize must be positive or None")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._data: Dict[Hashable, YieldResult] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(params: BondParameters, tag: Hashable = None) -> Tuple:
        return (params.key(), tag)

    def get_or_compute(
        self,
        params: BondParameters,
        compute: Callable[[BondParameters], YieldResult],
        tag: Hashable = None,
    ) -> YieldResult:
        key = self.make_key(params, tag)
        with self._lock:
            cached = self._data.get(key)
            if cached is not None:
                self.hits += 1
                logger.debug("Cache hit for %s", key)
                return cached
            self.misses += 1

        logger.debug("Cache miss for %s", key)
        result = compute(params)

        with self._lock:
            self._data[key] = result
            if self.maxsize is not None:
                while len(self._data) > self.maxsize:
                    del self._data[next(iter(self._data))]
        return result

    def __contains__(self, params: object) -> bool:
        if not isinstance(params, BondParameters):
            return False
        with self._lock:
            return any(k[0] == params.key() for k in self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self.hits = 0
            self.misses = 0
