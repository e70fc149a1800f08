from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from ccard_activation import __version__
from ccard_activation.activation import render_error_page
from ccard_activation.activation import router as activation_router
from ccard_activation.api.models import fail
from ccard_activation.api.router import router as api_router
from ccard_activation.auth import require_api_token
from ccard_activation.config import AppConfig, load_app_config
from ccard_activation.home import ensure_activation_layout, resolve_activation_home
from ccard_activation.identity import IdentityClient
from ccard_activation.logs import configure_file_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _is_api_path(request: Request) -> bool:
    path = request.url.path
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


def _status_to_code(status_code: int) -> str:
    if status_code == 401:
        return "unauthorized"
    if status_code == 404:
        return "not_found"
    if status_code == 405:
        return "method_not_allowed"
    if status_code == 422:
        return "validation_error"
    if status_code == 503:
        return "unavailable"
    if 400 <= status_code < 500:
        return "client_error"
    return "server_error"


def create_app(
    config: AppConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the activation service.

    When ``config`` is omitted it is loaded at startup from
    ${CCARD_ACTIVATION_HOME}/config/activation.json (plus environment
    overrides) and file logging is enabled under ${CCARD_ACTIVATION_HOME}/logs.
    ``transport`` replaces the outbound HTTP transport, mainly for tests.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app_config = config
        if app_config is None:
            home = resolve_activation_home()
            paths = ensure_activation_layout(home)
            app_config = load_app_config(paths)
            configure_file_logging(paths.log_path, app_config.logging)
            logger.info(f"Logs directory: {paths.logs_dir}")

        logger.info("CCard activation service starting up")
        logger.info(f"Identity server: {app_config.identity_server.uri}")
        if not app_config.identity_server.api_key.strip():
            logger.warning("Identity server API key is empty; upstream calls will be rejected")

        app.state.app_config = app_config
        app.state.message_catalog = app_config.message_catalog()
        app.state.identity_client = IdentityClient(
            app_config.identity_server, transport=transport
        )

        try:
            yield
        finally:
            await app.state.identity_client.aclose()

    app = FastAPI(title="CCard Activation", version=__version__, lifespan=_lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> Response:
        if not _is_api_path(request):
            return render_error_page(request, status_code=400)
        return JSONResponse(
            status_code=422,
            content=fail(
                code="validation_error",
                message="Request validation failed",
                details=exc.errors(),
            ).model_dump(mode="json"),
        )

    def _http_error_response(request: Request, status_code: int, detail: object) -> Response:
        if not _is_api_path(request):
            return render_error_page(request, status_code=status_code)
        return JSONResponse(
            status_code=status_code,
            content=fail(
                code=_status_to_code(status_code),
                message=detail if isinstance(detail, str) else "HTTP error",
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> Response:
        return _http_error_response(request, exc.status_code, exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        return _http_error_response(request, exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if not _is_api_path(request):
            return render_error_page(request, status_code=500)
        return JSONResponse(
            status_code=500,
            content=fail(code="internal_error", message="Internal server error").model_dump(
                mode="json"
            ),
        )

    app.include_router(activation_router)
    app.include_router(api_router, dependencies=[Depends(require_api_token)])

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
