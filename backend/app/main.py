"""FastAPI application serving the dashboard's quote feeds.

Endpoints
- GET /stocks: quotes for the tracked companies.
- GET /economic: market indices and indicators, plus a per-type grouping.
- GET /health: liveness probe.

Every response carries permissive CORS headers, and any OPTIONS request is
answered as a preflight with an empty 200.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import router
from app.config.settings import settings

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def setup_app_logging() -> None:
    """Configure the root logger with a stdout handler for the API process."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    has_stream = any(isinstance(h, logging.StreamHandler) for h in root.handlers)
    if not has_stream:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
        )
        root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_app_logging()
    logger.info("[api] logging configured environment=%s", settings.environment)
    yield


app = FastAPI(title="Market Pulse API", lifespan=lifespan)


@app.middleware("http")
async def cors_headers(request: Request, call_next) -> Response:
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed", "message": "Only GET requests are supported"},
        headers=exc.headers,
    )


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
