"""FastAPI application factory for the Productive Professor API.

Endpoints live in ``professor.api.routes``; this module wires the service
container, error mapping, CORS, request metrics and the optional static
front-end pages.
"""
from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from core import metrics
from core.errors import ProfessorError, map_exception
from core.services import Services, build_services
from professor.api.routes.catalog import router as catalog_router
from professor.api.routes.chat import router as chat_router
from professor.api.routes.student import router as student_router
from professor.api.routes.teacher import router as teacher_router

log = logging.getLogger("professor.api")

# route path -> file under the static dir
STATIC_PAGES = {
    "/": "index.html",
    "/teacher": "teacher.html",
    "/student": "student.html",
}


def _page_handler(path: str):
    def _page():  # noqa: D401
        return FileResponse(path)

    return _page


def create_app(services: Services | None = None) -> FastAPI:
    svc = services or build_services()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        info = svc.client.info()
        log.info(
            "completion client provider=%s model=%s max_tokens=%d",
            info.provider,
            info.model,
            info.max_tokens,
        )
        svc.start()
        try:
            yield
        finally:
            svc.stop()

    app = FastAPI(
        title="Productive Professor API",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.services = svc

    app.add_middleware(
        CORSMiddleware,
        allow_origins=svc.config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProfessorError)
    async def _domain_error(request: Request, exc: ProfessorError):
        if exc.status >= 500:
            log.error(
                "request failed path=%s code=%s detail=%s",
                request.url.path,
                exc.code,
                exc.__cause__ or exc.message,
            )
        return JSONResponse(
            status_code=exc.status, content={"error": exc.message}
        )

    @app.exception_handler(RequestValidationError)
    async def _bad_body(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400, content={"error": "Invalid request body"}
        )

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        log.exception(
            "unhandled error path=%s code=%s",
            request.url.path,
            map_exception(exc),
        )
        return JSONResponse(
            status_code=500, content={"error": "Internal server error"}
        )

    @app.get("/api/health")
    def health():  # noqa: D401
        return {"status": "healthy"}

    app.include_router(teacher_router)
    app.include_router(student_router)
    app.include_router(chat_router)
    app.include_router(catalog_router)

    # --- Static front-end pages (served only when built/present) ---
    static_dir = os.path.join(os.getcwd(), svc.config.server.static_dir)
    if os.path.isdir(static_dir):
        for route, filename in STATIC_PAGES.items():
            app.add_api_route(
                route,
                _page_handler(os.path.join(static_dir, filename)),
                include_in_schema=False,
            )

    @app.middleware("http")
    async def _metrics_mw(request: Request, call_next):  # noqa: D401
        start = time.time()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            duration_ms = (time.time() - start) * 1000.0
            # label by route template so path params don't mint new series
            route = request.scope.get("route")
            labels = {
                "route": getattr(route, "path", "unmatched"),
                "method": request.method,
            }
            metrics.inc("api_request_total", labels)
            metrics.observe("api_request_latency_ms", duration_ms, labels)
            if status >= 400:
                metrics.inc(
                    "api_request_errors_total", labels | {"status": status}
                )

    return app


# .env must be in the environment before the container reads the API key
load_dotenv()
app = create_app()


def main() -> None:
    import uvicorn

    from core.logging_utils import configure_logging

    cfg = app.state.services.config
    configure_logging(cfg.logging.level, cfg.logging.format)
    port = int(os.getenv(cfg.server.port_env) or cfg.server.port)
    log.info("Productive Professor server running on port %d", port)
    uvicorn.run("professor.api.app:app", host=cfg.server.host, port=port)


if __name__ == "__main__":  # pragma: no cover
    main()
