"""FastAPI routes for loading SDL files over HTTP."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from graphql import GraphQLError
from pydantic import BaseModel

from sdl_import.errors import ImportOutsideRootError, SDLImportError
from sdl_import.models import LoaderOptions
from sdl_import.web.state import AppState

router = APIRouter(prefix="/api")


# --- Request models ---

class LoadRequest(BaseModel):
    path: str
    base_dir: str | None = None
    no_imports: bool = False


class GraphRequest(BaseModel):
    path: str
    base_dir: str | None = None


# --- Path safety ---

def _state(request: Request) -> AppState:
    return request.app.state.sdl


def _validate_path(state: AppState, path: str, base_dir: str | None) -> Path:
    """Ensure path exists and is under the service root."""
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = Path(base_dir or state.root_dir).expanduser() / p
    resolved = p.resolve()
    if not resolved.exists():
        raise HTTPException(404, f"Path not found: {resolved}")
    if not resolved.is_relative_to(state.root_dir):
        raise HTTPException(403, "Path must be under the service root")
    if not resolved.is_file():
        raise HTTPException(400, f"Not a file: {resolved}")
    return resolved


def _raise_for(e: Exception):
    if isinstance(e, ImportOutsideRootError):
        raise HTTPException(403, str(e))
    if isinstance(e, FileNotFoundError):
        raise HTTPException(404, f"Imported file not found: {e.filename}")
    if isinstance(e, GraphQLError):
        # Message only; str(e) would echo source lines
        raise HTTPException(422, e.message)
    if isinstance(e, SDLImportError):
        raise HTTPException(422, str(e))
    raise e


# --- Endpoints ---

@router.post("/load")
async def load(req: LoadRequest, request: Request):
    state = _state(request)
    entry = _validate_path(state, req.path, req.base_dir)
    options = LoaderOptions(no_imports=req.no_imports, root_dir=state.root_dir)

    try:
        result = await state.loader.load_async(entry.parent, entry, options)
    except (OSError, SDLImportError, GraphQLError) as e:
        _raise_for(e)

    files = [str(f) for f in result.graph.files()] if result.graph else [str(entry)]
    state.record(entry, len(files), result.definition_count)

    return {
        "entry": str(entry),
        "sdl": result.sdl,
        "files": files,
        "definitions": result.definition_count,
    }


@router.post("/graph")
async def graph(req: GraphRequest, request: Request):
    state = _state(request)
    entry = _validate_path(state, req.path, req.base_dir)

    try:
        import_graph = await asyncio.to_thread(
            state.loader.build_import_graph, entry, state.root_dir,
        )
    except (OSError, SDLImportError) as e:
        _raise_for(e)

    return {
        "entry": str(entry),
        "files": [
            {
                "path": str(file_name),
                "types": list(dict.fromkeys(types)),
                "wildcard": import_graph.is_wildcard(file_name),
            }
            for file_name, types in import_graph.items()
        ],
    }


@router.get("/history")
async def history(request: Request):
    return {"loads": [vars(record) for record in _state(request).history]}
