"""
HTTP client for the chain's pointer registry REST endpoints.
Every failure mode is reported as an UNAVAILABLE lookup result rather than raised.
"""
import httpx
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from pointer_api.config import ServiceConfig
from pointer_api.models import LookupResult, PointerInfo, PointerType

logger = logging.getLogger(__name__)

POINTEE_ENDPOINT = "/sei-protocol/seichain/evm/pointee"
POINTER_ENDPOINT = "/sei-protocol/seichain/evm/pointer"


class ChainQueryClient:
    """HTTP client for pointer/pointee lookups. Implements PointerQueryProtocol."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the chain query client.

        Args:
            base_url: REST endpoint of the chain (defaults to SEIREST env var)
            api_key: Key sent as x-api-key on every request (defaults to API_KEY env var)
            timeout: Per-request timeout in seconds
            client: Pre-built AsyncClient to share, mainly for tests
        """
        self.base_url = (base_url or ServiceConfig.SEIREST).rstrip('/')
        self.api_key = api_key if api_key is not None else ServiceConfig.API_KEY
        request_timeout = timeout if timeout is not None else ServiceConfig.REQUEST_TIMEOUT
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(
                request_timeout,
                connect=min(ServiceConfig.CONNECT_TIMEOUT, request_timeout),
            )
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def lookup(self, endpoint: str, params: Dict[str, Any]) -> LookupResult:
        """
        GET {base_url}{endpoint} and interpret the pointer existence payload.

        Returns FOUND / NOT_FOUND for a well-formed 2xx answer, UNAVAILABLE otherwise.
        """
        url = f"{self.base_url}{endpoint}"

        try:
            response = await self.client.get(url, params=params, headers=self._headers())
        except httpx.TimeoutException:
            logger.warning(f"Chain query timed out: {endpoint} {params}")
            return LookupResult.absent("timeout")
        except httpx.HTTPError as e:
            logger.warning(f"Chain query network error: {endpoint} {params}: {e}")
            return LookupResult.absent("network error")

        if response.status_code == 429:
            logger.warning(f"Chain query rate limited (HTTP 429): {endpoint} {params}")
            return LookupResult.absent("rate limited")
        if not response.is_success:
            logger.warning(f"Chain query failed with HTTP {response.status_code}: {endpoint} {params}")
            return LookupResult.absent(f"HTTP {response.status_code}")

        try:
            info = PointerInfo.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Chain query returned malformed response: {endpoint} {params}: {e}")
            return LookupResult.absent("malformed response")

        if not info.exists:
            return LookupResult.not_found(info)
        return LookupResult.found(info)

    async def pointee_by_pointer(self, pointer: str, pointer_type: PointerType) -> LookupResult:
        """Is `pointer` a registered pointer of this type? Answered with its pointee."""
        result = await self.lookup(POINTEE_ENDPOINT, {
            "pointerType": int(pointer_type),
            "pointer": pointer,
        })
        return _require_field(result, "pointee")

    async def pointer_by_pointee(self, pointee: str, pointer_type: PointerType) -> LookupResult:
        """Is a pointer of this type registered for `pointee`? Answered with the pointer."""
        result = await self.lookup(POINTER_ENDPOINT, {
            "pointerType": int(pointer_type),
            "pointee": pointee,
        })
        return _require_field(result, "pointer")

    async def aclose(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()


def _require_field(result: LookupResult, field: str) -> LookupResult:
    # exists=true without the counterpart address is not a usable answer
    if result.is_found and not getattr(result.info, field):
        logger.warning(f"Chain query reported exists=true without '{field}'")
        return LookupResult.absent("malformed response")
    return result
