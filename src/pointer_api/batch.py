"""
Batch coordinator: validation, caching and concurrent resolution of many addresses.
Output order always matches input order, and one failing address never affects another.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from pointer_api.cache import ResponseCache, cache_key
from pointer_api.models import ClassificationResult
from pointer_api.resolver import PointerResolver
from pointer_api.validation import INVALID_FORMAT, validate


class BatchTooLargeError(ValueError):
    def __init__(self, size: int, limit: int):
        super().__init__(f"Batch of {size} addresses exceeds the limit of {limit}")
        self.size = size
        self.limit = limit


def _echo(raw: Any) -> str:
    return raw if isinstance(raw, str) else repr(raw)


class BatchCoordinator:
    def __init__(
        self,
        resolver: PointerResolver,
        cache: Optional[ResponseCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.resolver = resolver
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    async def resolve_one(self, address: Any) -> ClassificationResult:
        """Validate, consult the cache, resolve on a miss and cache the result on success."""
        if not validate(address):
            return ClassificationResult.failure(_echo(address), INVALID_FORMAT)
        return await self._resolve_valid(address)

    async def _resolve_valid(self, address: str) -> ClassificationResult:
        try:
            if self.cache is not None:
                cached = self.cache.get(address)
                if cached is not None:
                    self.logger.debug(f"Cache hit for {address}")
                    return cached.model_copy(update={"address": address})

            result = await self.resolver.classify(address)

            if self.cache is not None:
                self.cache.set(address, result)
            return result
        except Exception:
            self.logger.exception(f"Error processing address {address}")
            return ClassificationResult.failure(address, f"Failed to process address {address}")

    async def resolve_many(
        self, addresses: Sequence[Any], max_batch_size: Optional[int] = None
    ) -> List[ClassificationResult]:
        """
        Resolve a batch concurrently.

        Invalid addresses are answered up front without any lookup, duplicates (after
        case normalization) share one resolution, and the result list has the same length
        and order as the input.

        Raises:
            BatchTooLargeError: if the batch is longer than max_batch_size
        """
        if max_batch_size is not None and len(addresses) > max_batch_size:
            raise BatchTooLargeError(len(addresses), max_batch_size)

        results: List[Optional[ClassificationResult]] = [None] * len(addresses)
        pending: Dict[str, List[int]] = {}

        for index, raw in enumerate(addresses):
            if not validate(raw):
                results[index] = ClassificationResult.failure(_echo(raw), INVALID_FORMAT)
                continue
            pending.setdefault(cache_key(raw), []).append(index)

        invalid = len(addresses) - sum(len(v) for v in pending.values())
        self.logger.info(
            f"Resolving batch of {len(addresses)} addresses "
            f"({len(pending)} unique, {invalid} invalid)"
        )

        keys = list(pending)
        resolved = await asyncio.gather(
            *(self._resolve_valid(addresses[pending[key][0]]) for key in keys)
        )

        for key, result in zip(keys, resolved):
            for index in pending[key]:
                requested = addresses[index]
                results[index] = result if result.address == requested else result.model_copy(
                    update={"address": requested}
                )

        return results
