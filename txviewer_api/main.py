"""
TxViewer API - HTTP bridge for the Frontend to Etherscan.

Provides REST endpoints for:
- Static viewer page (GET /)
- Latest account transactions (GET /api/txs)
- Health checks (GET /health)
"""

import uvicorn
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .address import normalize_address
from .config import Settings, get_settings
from .errors import MissingCredential, TransportError, TxViewerError
from .etherscan import EtherscanClient, EtherscanConfig
from .mapper import map_transactions
from .models import ErrorResponse, HealthResponse, TxsResponse

# Configure logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()

STATIC_DIR = Path(__file__).parent / "static"

# Sent on every JSON response, with or without an Origin header.
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def json_response(status_code: int, content: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


# ============================================================================
# Dependencies
# ============================================================================


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_etherscan(request: Request) -> EtherscanClient:
    client: Optional[EtherscanClient] = getattr(request.app.state, "etherscan", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Etherscan client not initialized")
    return client


# ============================================================================
# Error Handlers
# ============================================================================


async def txviewer_error_handler(request: Request, exc: TxViewerError) -> JSONResponse:
    return json_response(exc.status_code, exc.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Any:
    """Unknown routes and methods get a plain-text 404."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not found", status_code=404)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers={**(exc.headers or {}), **CORS_HEADERS},
    )


# ============================================================================
# Routes
# ============================================================================

router = APIRouter()


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    """Serve the viewer page."""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html; charset=utf-8")


@router.get(
    "/api/txs",
    response_model=TxsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid address"},
        500: {"model": ErrorResponse, "description": "Missing API key or fetch failure"},
        502: {"model": ErrorResponse, "description": "Etherscan reported an error"},
    },
)
async def get_txs(
    request: Request,
    address: Optional[str] = None,
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Get the latest transactions of an address.

    Returns the most recent transactions (newest first) with
    ISO dates, success/failed status, ether values and explorer links.
    """
    if not settings.etherscan_api_key:
        raise MissingCredential()

    checksummed = normalize_address(address)
    etherscan = get_etherscan(request)

    try:
        records = await etherscan.get_txlist(
            checksummed,
            page=1,
            offset=settings.tx_page_size,
            sort="desc",
        )
        txs = map_transactions(records, settings.explorer_tx_url)
    except TxViewerError:
        raise
    except Exception as e:
        logger.error("Failed to fetch transactions", error=str(e), address=checksummed)
        raise TransportError(str(e)) from e

    logger.info("Transactions fetched", address=checksummed, count=len(txs))

    body = TxsResponse(address=checksummed, chain_id=settings.chain_id, txs=txs)
    return json_response(200, body.model_dump(by_alias=True))


@router.get("/health", response_model=HealthResponse)
async def health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Check API health and Etherscan connectivity.
    """
    etherscan: Optional[EtherscanClient] = getattr(request.app.state, "etherscan", None)
    etherscan_ok = False
    if etherscan is not None:
        etherscan_ok = await etherscan.check_connectivity()

    body = HealthResponse(
        status="ok" if etherscan_ok else "degraded",
        version=__version__,
        chain_id=settings.chain_id,
        etherscan_configured=bool(settings.etherscan_api_key),
    )
    return json_response(200, body.model_dump(by_alias=True))


# ============================================================================
# App Factory
# ============================================================================


def create_app(
    settings: Optional[Settings] = None,
    etherscan: Optional[EtherscanClient] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Configuration; loaded from the environment if omitted
        etherscan: Prebuilt Etherscan client; built from settings if omitted
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        client = etherscan or EtherscanClient(
            EtherscanConfig(
                base_url=settings.etherscan_api_url,
                api_key=settings.etherscan_api_key,
                chain_id=settings.chain_id,
                timeout=settings.request_timeout,
            )
        )
        app.state.etherscan = client

        logger.info(
            "API started",
            version=__version__,
            host=settings.host,
            port=settings.port,
            chain_id=settings.chain_id,
            etherscan_configured=bool(settings.etherscan_api_key),
        )

        yield

        await client.close()
        app.state.etherscan = None
        logger.info("API stopped")

    app = FastAPI(
        title="TxViewer API",
        description="HTTP bridge for the Frontend to Etherscan",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TxViewerError, txviewer_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.include_router(router)

    return app


# ============================================================================
# Entry Point
# ============================================================================


def run() -> None:
    """Run the API server."""
    settings = get_settings()
    uvicorn.run(
        "txviewer_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
