"""FastAPI entrypoint for the LLM proxy backend."""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from llm_proxy import __version__, schemas
from llm_proxy.backends import Backend, build_backend
from llm_proxy.config import settings
from llm_proxy.errors import (
    HTTPStatusError,
    InvalidInputError,
    NotFoundError,
    ProxyError,
    ServerError,
)
from llm_proxy.logging_utils import configure_logging, get_logger, preview
from llm_proxy.middleware import BodySizeLimitMiddleware
from llm_proxy.services.rewrite import RewriteService
from llm_proxy.services.suggestion import SuggestionService

configure_logging(level=settings.log_level)
logger = get_logger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}

ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse},
    500: {"model": schemas.ErrorResponse},
}


@lru_cache(maxsize=1)
def get_backend() -> Backend:
    """Build the backend once; the mode is fixed for the process lifetime."""
    backend = build_backend(settings)
    logger.info("Backend selected | mode=%s info=%s", backend.mode, backend.info)
    if backend.mode == "simulate":
        logger.warning("Neither OPENAI_API_KEY nor LOCAL_MODEL_URL is set; serving simulated responses.")
    return backend


def get_rewrite_service(backend: Backend = Depends(get_backend)) -> RewriteService:
    return RewriteService(backend=backend, max_text_length=settings.max_text_length)


def get_suggestion_service(backend: Backend = Depends(get_backend)) -> SuggestionService:
    return SuggestionService(backend=backend)


def get_static_dir() -> Path:
    return Path(settings.static_dir)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    get_backend()
    yield


app = FastAPI(title="LLM Proxy Backend", version=__version__, lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)


@app.middleware("http")
async def add_security_headers(request: Request, call_next) -> Response:
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


@app.exception_handler(ProxyError)
async def handle_proxy_error(request: Request, exc: ProxyError) -> JSONResponse:
    """Log and render any proxy error as a JSON envelope."""
    if exc.status_code >= 500:
        logger.error("%s %s failed | error=%s details=%s", request.method, request.url.path, exc.error, exc.details)
    else:
        logger.warning("%s %s rejected | error=%s details=%s", request.method, request.url.path, exc.error, exc.details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework errors (unknown route, wrong method) in the same envelope."""
    return await handle_proxy_error(request, HTTPStatusError.from_http_exception(exc))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map schema validation failures onto the invalid-input envelope."""
    messages = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}"
        for error in exc.errors()
    ]
    return await handle_proxy_error(request, InvalidInputError("; ".join(messages) or None))


@app.get("/health", response_model=schemas.HealthResponse)
async def health(backend: Backend = Depends(get_backend)) -> schemas.HealthResponse:
    """Simple health-check endpoint."""
    return schemas.HealthResponse(
        status="ok",
        environment=settings.environment,
        version=__version__,
        mode=backend.mode,
    )


@app.get("/api/mode", response_model=schemas.ModeResponse)
async def get_mode(backend: Backend = Depends(get_backend)) -> schemas.ModeResponse:
    """Report the active backend mode."""
    return schemas.ModeResponse(mode=backend.mode, info=backend.info)


@app.post("/api/rewrite", response_model=schemas.RewriteResponse, responses=ERROR_RESPONSES)
async def rewrite_text(
    payload: schemas.RewriteRequest,
    service: RewriteService = Depends(get_rewrite_service),
) -> schemas.RewriteResponse:
    """Rewrite text in the requested tone."""
    try:
        result = await service.rewrite(text=payload.text, tone=payload.tone)
    except ProxyError:
        raise
    except Exception as exc:
        logger.exception("Rewrite request failed")
        raise ServerError() from exc

    logger.info(
        "Rewrite request processed | mode=%s tone=%s latency_ms=%.2f text_len=%d%s",
        result.mode,
        result.tone,
        result.latency_ms,
        len(payload.text),
        preview(payload.text, enabled=settings.log_content_enabled),
    )
    return schemas.RewriteResponse(rewritten=result.rewritten)


@app.post("/api/suggestion", response_model=schemas.SuggestionResponse, responses=ERROR_RESPONSES)
async def suggest_break(
    payload: schemas.SuggestionRequest | None = None,
    service: SuggestionService = Depends(get_suggestion_service),
) -> schemas.SuggestionResponse:
    """Return a short wellness suggestion, optionally tailored to context."""
    context = payload.context if payload else None
    try:
        result = await service.suggest(context=context)
    except ProxyError:
        raise
    except Exception as exc:
        logger.exception("Suggestion request failed")
        raise ServerError() from exc

    logger.info(
        "Suggestion request processed | mode=%s latency_ms=%.2f context_len=%d%s",
        result.mode,
        result.latency_ms,
        len(context or ""),
        preview(context, enabled=settings.log_content_enabled),
    )
    return schemas.SuggestionResponse(suggestion=result.suggestion)


@app.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str, static_dir: Path = Depends(get_static_dir)) -> Response:
    """Serve the frontend bundle, falling back to its entry document."""
    if full_path == "api" or full_path.startswith("api/"):
        raise NotFoundError(f"No API route for /{full_path}.")

    root = static_dir.resolve()
    if full_path:
        candidate = (root / full_path).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)

    index = root / "index.html"
    if index.is_file():
        return FileResponse(index)
    raise NotFoundError("Frontend bundle not found.")
