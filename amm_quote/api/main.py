"""FastAPI application serving quotes over snapshot payloads.

The service is stateless: every request carries the pool snapshot it is
priced against. Throttling is left to whatever sits in front of it.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from amm_quote import __version__
from amm_quote.api.endpoints import router
from amm_quote.errors import QuoteError
from amm_quote.models.responses import ErrorResponse

logger = structlog.get_logger()

HOST = os.environ.get("AMM_QUOTE_HOST", "0.0.0.0")
PORT = int(os.environ.get("AMM_QUOTE_PORT", "8000"))
RELOAD = os.environ.get("AMM_QUOTE_DEBUG", "false").lower() in ("true", "1", "yes")

# A snapshot with a full APY ring is a few kilobytes
MAX_BODY_BYTES = int(os.environ.get("AMM_QUOTE_MAX_BODY_BYTES", str(1024 * 1024)))

app = FastAPI(
    title="AMM Quote",
    description="Swap, deposit and withdraw quotes for two-asset dynamic AMM pools",
    version=__version__,
)
app.include_router(router)


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return -1


@app.middleware("http")
async def enforce_body_limit(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Refuse bodies above MAX_BODY_BYTES before they are parsed."""
    length = _declared_length(request)
    if length is not None and length < 0:
        return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
    if length is not None and length > MAX_BODY_BYTES:
        logger.warning("request_too_large", path=request.url.path, content_length=length)
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(QuoteError)
async def quote_error_handler(request: Request, exc: QuoteError) -> JSONResponse:
    """Quote failures become 400s tagged with the error class name."""
    name = type(exc).__name__
    logger.warning("quote_rejected", path=request.url.path, error=name, detail=str(exc))
    return JSONResponse(status_code=400, content=ErrorResponse(error=name, detail=str(exc)).model_dump())


@app.get("/health")
async def health() -> dict[str, object]:
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Start uvicorn with AMM_QUOTE_HOST, AMM_QUOTE_PORT and AMM_QUOTE_DEBUG (reload)."""
    uvicorn.run("amm_quote.api.main:app", host=HOST, port=PORT, reload=RELOAD)


if __name__ == "__main__":
    run()
