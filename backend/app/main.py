"""FastAPI application entrypoint.

`create_app` wires the whole application explicitly: database engine,
template loader, view resolver, interceptor registry, middleware,
exception handlers and the product routes. Nothing is looked up from
ambient globals at request time; every collaborator hangs off
`app.state`.

Endpoints implemented:
- GET /            (redirects to /products)
- GET /health
- /products/...    (see `app.controllers`)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from sqlalchemy.engine import Engine
from typing import Optional
import json
import logging
import time
import uuid
import uvicorn
from . import controllers
from .config import Settings, settings
from .database import build_engine, create_db_and_tables
from .interceptors import InterceptorRegistry, LoggingInterceptor, apply_pre_handle, trigger_after_completion
from .repositories import StoreError
from .schemas import FormBindingError, format_errors
from .views import ViewResolver, render_error

logger = logging.getLogger("app.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)


def default_interceptors() -> InterceptorRegistry:
    registry = InterceptorRegistry()
    registry.add(LoggingInterceptor(), path_patterns=("/**",))
    return registry


def create_app(
    app_settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    interceptors: Optional[InterceptorRegistry] = None,
) -> FastAPI:
    """Build the application.

    `engine` defaults to one built from `DATABASE_URL`; tables are
    created eagerly. `interceptors` defaults to a registry holding a
    single `LoggingInterceptor` for every path.
    """
    app_settings = app_settings or settings
    if engine is None:
        engine = build_engine(app_settings.DATABASE_URL, echo=app_settings.SQL_ECHO)
    create_db_and_tables(engine)

    app = FastAPI(title="Product Catalog")
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.templates = Jinja2Templates(directory=str(app_settings.TEMPLATES_DIR))
    app.state.view_resolver = ViewResolver(app_settings.VIEW_PREFIX, app_settings.VIEW_SUFFIX)
    app.state.interceptors = interceptors if interceptors is not None else default_interceptors()

    # Registered first so it runs inside request_context_middleware and
    # sees the request id.
    @app.middleware("http")
    async def interceptor_middleware(request: Request, call_next):
        chain = app.state.interceptors.for_path(request.url.path)
        if not chain:
            return await call_next(request)
        try:
            if not apply_pre_handle(request, chain):
                response = PlainTextResponse("request rejected", status_code=403)
                trigger_after_completion(request, response, None)
                return response
            response = await call_next(request)
        except Exception as exc:
            trigger_after_completion(request, None, exc)
            raise
        trigger_after_completion(request, response, getattr(request.state, "error", None))
        return response

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        request.state.request_id = req_id
        started = time.perf_counter()
        response: Response
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
            logger.exception(
                "request_failed %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "duration_ms": elapsed_ms,
                    },
                    ensure_ascii=True,
                ),
            )
            raise
        response.headers["X-Request-ID"] = req_id
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        request.state.error = exc
        messages = format_errors(exc.errors())
        logger.warning("bad_request %s", json.dumps({"path": request.url.path, "errors": messages}, ensure_ascii=True))
        return render_error(request, 400, "Bad request", messages)

    @app.exception_handler(FormBindingError)
    async def form_binding_handler(request: Request, exc: FormBindingError):
        request.state.error = exc
        logger.warning("form_binding_failed %s", json.dumps({"path": request.url.path, "errors": exc.messages}, ensure_ascii=True))
        return render_error(request, 400, "Bad request", exc.messages)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        request.state.error = exc
        logger.error("store_failure %s", json.dumps({"path": request.url.path, "method": request.method}, ensure_ascii=True), exc_info=exc)
        return render_error(request, 500, "Server error", ["The product store is unavailable. Please try again later."])

    @app.get("/")
    def home():
        """Send visitors to the product list."""
        return RedirectResponse(url=controllers.LIST_URL, status_code=302)

    @app.get("/health")
    def health():
        """Lightweight health check for uptime monitoring."""
        return {"status": "ok"}

    app.include_router(controllers.router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENV == "dev",
        log_config=None,
    )
