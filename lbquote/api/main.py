"""FastAPI application for the liquidity-book quoting service.

The service is stateless: every request carries the pool snapshot it wants
quoted, and updated fee params are returned rather than stored.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lbquote import __version__
from lbquote.api.endpoints import router
from lbquote.errors import InsufficientLiquidity, LiquidityBookError
from lbquote.models.quote import ErrorResponse

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("LBQUOTE_HOST", "0.0.0.0")
PORT = int(os.environ.get("LBQUOTE_PORT", "8000"))
DEBUG = os.environ.get("LBQUOTE_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (10 MB); full bin books are large but bounded
MAX_REQUEST_SIZE = 10 * 1024 * 1024

app = FastAPI(
    title="Liquidity Book Quoter",
    description="Exact-in / exact-out quoting and dynamic fees for liquidity-book pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(LiquidityBookError)
async def kernel_error_handler(request: Request, exc: LiquidityBookError) -> JSONResponse:
    """Map kernel errors to 409 (insufficient liquidity) or 400 (bad parameters)."""
    status_code = 409 if isinstance(exc, InsufficientLiquidity) else 400
    logger.warning(
        "quote_rejected",
        path=request.url.path,
        error=exc.kind,
        field=exc.field,
        detail=str(exc),
    )
    body = ErrorResponse(error=exc.kind, detail=str(exc), field=exc.field)
    return JSONResponse(status_code=status_code, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quoting API server.

    Configuration via environment variables:
    - LBQUOTE_HOST: Host to bind to (default: 0.0.0.0)
    - LBQUOTE_PORT: Port to bind to (default: 8000)
    - LBQUOTE_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "lbquote.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
