"""Static asset server application: files under the root directory mounted at the URL prefix"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from http import HTTPStatus
from typing import Optional
import logging
import time
import sys
from contextlib import asynccontextmanager

from config import Settings, settings

# Logs go to stderr so they never mix with served content on stdout
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def not_found_message(request: Request) -> str:
    return f"Route {request.method}:{request.url.path} not found"


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Build the ASGI app serving config.root_dir under config.url_prefix"""
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Serving static files from {config.root_dir} at prefix {config.url_prefix}")
        yield
        logger.info("Shutting down static asset server")

    app = FastAPI(
        title="Static Asset Server",
        description="Serves files from a local directory",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan
    )

    # Request logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            response_time = (time.time() - start_time) * 1000
            logger.error(
                f"{request.method} {request.url.path} failed ({response_time:.1f}ms): {e}"
            )
            raise

        response_time = (time.time() - start_time) * 1000
        response.headers["X-Response-Time"] = f"{response_time:.3f}"
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({response_time:.1f}ms)"
        )

        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        status = HTTPStatus(exc.status_code)
        if exc.status_code == 404:
            message = not_found_message(request)
        else:
            message = exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message, "error": status.phrase, "statusCode": exc.status_code},
            headers=getattr(exc, "headers", None)
        )

    # Existence of the root is checked per request by StaticFiles
    app.mount(
        config.url_prefix,
        StaticFiles(directory=config.root_dir, html=config.html_index, check_dir=False),
        name="static"
    )

    return app


app = create_app()
