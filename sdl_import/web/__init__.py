"""HTTP API for sdl-import."""

from sdl_import.web.app import create_app

__all__ = ["create_app"]
