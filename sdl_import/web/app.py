"""FastAPI application factory."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI

from sdl_import import __version__
from sdl_import.web.api import router
from sdl_import.web.state import AppState


def create_app(root_dir: Path | None = None) -> FastAPI:
    app = FastAPI(title="sdl-import", version=__version__)
    app.state.sdl = AppState(root_dir)
    app.include_router(router)
    return app
