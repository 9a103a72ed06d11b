"""
FastAPI backend for the pointer classification service.
Thin HTTP adapter over the batch coordinator: single lookups by path, single or batch via POST.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from pointer_api import __version__
from pointer_api.batch import BatchCoordinator, BatchTooLargeError
from pointer_api.cache import ResponseCache
from pointer_api.chain_client import ChainQueryClient
from pointer_api.config import ServiceConfig
from pointer_api.models import ResolveRequest
from pointer_api.resolver import PointerResolver
from pointer_api.validation import InvalidAddressError, validate_input

logger = logging.getLogger(__name__)


def build_coordinator(client: ChainQueryClient) -> BatchCoordinator:
    return BatchCoordinator(PointerResolver(client), cache=ResponseCache())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler. Owns the chain client unless a coordinator was injected."""
    client = None
    if app.state.coordinator is None:
        client = ChainQueryClient()
        app.state.coordinator = build_coordinator(client)
    logger.info(f"Starting pointer API against {ServiceConfig.SEIREST}...")
    yield
    logger.info("Shutting down pointer API...")
    if client is not None:
        await client.aclose()


def get_coordinator(request: Request) -> BatchCoordinator:
    coordinator = request.app.state.coordinator
    if coordinator is None:
        raise HTTPException(status_code=503, detail="Service is starting up")
    return coordinator


def batch_limit_for(api_key: Optional[str]) -> int:
    """Callers presenting a known client key get the larger batch allowance."""
    if api_key and api_key in ServiceConfig.CLIENT_API_KEYS:
        return ServiceConfig.MAX_BATCH_SIZE_AUTHENTICATED
    return ServiceConfig.MAX_BATCH_SIZE


def create_app(coordinator: Optional[BatchCoordinator] = None) -> FastAPI:
    app = FastAPI(
        title="Pointer Classification API",
        description="Classifies EVM, CosmWasm and native denoms as pointers or base assets",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.coordinator = coordinator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health(request: Request):
        """Detailed health check."""
        current = request.app.state.coordinator
        cache = current.cache if current is not None else None
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": __version__,
            "cache": cache.stats() if cache is not None else None,
        }

    @app.post("/")
    async def resolve(
        body: ResolveRequest,
        x_api_key: Optional[str] = Header(None),
        coordinator: BatchCoordinator = Depends(get_coordinator),
    ):
        """Resolve {"address": ...} to one object or {"addresses": [...]} to an ordered array."""
        if body.address is not None:
            return await _resolve_single(coordinator, body.address)

        if body.addresses is not None:
            if not body.addresses:
                raise HTTPException(status_code=400, detail="addresses must not be empty")
            try:
                results = await coordinator.resolve_many(
                    body.addresses, max_batch_size=batch_limit_for(x_api_key)
                )
            except BatchTooLargeError as e:
                logger.warning(f"Rejected batch: {e}")
                raise HTTPException(status_code=413, detail=str(e))
            return [r.to_response() for r in results]

        raise HTTPException(
            status_code=400,
            detail="An address or an array of addresses is required",
        )

    @app.get("/{address:path}")
    async def resolve_path(address: str, coordinator: BatchCoordinator = Depends(get_coordinator)):
        """Single-address lookup; ibc/ and factory/ denoms may be passed URL-encoded or raw."""
        return await _resolve_single(coordinator, address)

    return app


async def _resolve_single(coordinator: BatchCoordinator, address: str):
    try:
        validate_input(address)
    except InvalidAddressError as e:
        raise HTTPException(status_code=400, detail={"address": address, "error": e.reason})
    result = await coordinator.resolve_one(address)
    return result.to_response()


app = create_app()


def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=ServiceConfig.LOG_LEVEL)
    uvicorn.run(
        "pointer_api.api:app",
        host=ServiceConfig.HOST,
        port=ServiceConfig.PORT,
    )


if __name__ == "__main__":
    main()
