from __future__ import annotations

from pathlib import Path

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from services.store.app import observability
from services.store.app.logging import configure_logging, logger
from services.store.app.middleware import body_parser, handle_errors
from services.store.app.routes import build_router
from services.store.app.settings import SETTINGS, StoreSettings


def create_app(settings: StoreSettings = SETTINGS, router: APIRouter | None = None) -> FastAPI:
    app = FastAPI(title="B7Store API", version="0.1.0")

    # Last added runs first: CORS, metrics, error handler, body parser, routes.
    app.middleware("http")(body_parser(settings.webhook_path, settings.max_body_size))
    app.middleware("http")(handle_errors)
    observability.instrument(app, settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router if router is not None else build_router(settings))

    # Mounted after the routes so it only sees paths no route claimed.
    # html=True serves index.html for "/" and directory paths.
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


configure_logging(SETTINGS.log_level)
app = create_app()


def main() -> None:
    logger.info("server_starting", service="b7store", host=SETTINGS.host, port=SETTINGS.port)
    uvicorn.run(app, host=SETTINGS.host, port=SETTINGS.port, log_config=None)


if __name__ == "__main__":
    main()
