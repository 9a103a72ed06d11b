"""
In-memory response cache for classification results.

Bounded by entry count (least recently used entry evicted first) and by a sliding
time-to-live: each successful read pushes the entry's expiry forward.
"""
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from pointer_api.config import ServiceConfig
from pointer_api.models import AddressFamily, ClassificationResult
from pointer_api.validation import detect_family


@dataclass
class CacheEntry:
    """Cached classification with its expiry deadline."""
    value: ClassificationResult
    expires_at: float
    hits: int = 0

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


def cache_key(address: str) -> str:
    """EVM hex is case-insensitive; denoms and bech32 strings are kept verbatim."""
    if detect_family(address) is AddressFamily.EVM:
        return address.lower()
    return address


class ResponseCache:
    def __init__(
        self,
        max_size: Optional[int] = None,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_size = max_size if max_size is not None else ServiceConfig.CACHE_MAX_SIZE
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else ServiceConfig.CACHE_TTL_SECONDS
        if self.max_size < 1:
            raise ValueError("max_size must be at least 1")
        if self.ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, address: str) -> Optional[ClassificationResult]:
        key = cache_key(address)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            if entry.is_expired(now):
                del self._entries[key]
                self.misses += 1
                return None
            entry.expires_at = now + self.ttl_seconds
            entry.hits += 1
            self._entries.move_to_end(key)
            self.hits += 1
            return entry.value

    def set(self, address: str, value: ClassificationResult) -> bool:
        """Store a successful classification. Error results are never cached."""
        if value.is_error:
            return False
        key = cache_key(address)
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + self.ttl_seconds)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
        return True

    def clear(self):
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> Dict[str, int]:
        return {"size": len(self), "max_size": self.max_size, "hits": self.hits, "misses": self.misses}
