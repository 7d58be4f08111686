"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from infrastructure.config import settings
from infrastructure.logging import setup_logging
from interfaces.api.routes.auth_routes import router as auth_router
from interfaces.api.routes.gallery_routes import router as gallery_router
from interfaces.api.routes.mint_routes import router as mint_router
from interfaces.api.routes.webhook_routes import router as webhook_router

# Configure structured logging
setup_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown."""
    logger.info(
        "app_starting",
        env=settings.app_env,
        chain_network=settings.chain_network,
        content_store_provider=settings.content_store_provider,
    )

    if not settings.drawing_nft_contract_address:
        logger.warning("app_config_missing", key="DRAWING_NFT_CONTRACT_ADDRESS")
    if not settings.minter_private_key:
        logger.info("app_server_minting_disabled", reason="MINTER_PRIVATE_KEY not set")

    logger.info("app_ready")

    yield

    logger.info("app_stopped")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.info("request_rejected", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"{location}: {message}" if location else message},
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Onchain Slate API: pin hand-drawn canvases and mint them as NFTs",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    app.include_router(mint_router)
    app.include_router(gallery_router)
    app.include_router(auth_router)
    app.include_router(webhook_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Create app instance
app = create_app()
