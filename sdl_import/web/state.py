"""In-memory state for the HTTP API: one loader (and its caches) per app."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from sdl_import.loader import GraphQLFileLoader


@dataclass
class LoadRecord:
    entry: str
    files: int
    definitions: int
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class AppState:
    """Loader, path root and a short history of loads."""

    max_history = 50

    def __init__(self, root_dir: Path | None = None):
        if root_dir is None:
            root_dir = Path(os.getenv("SDL_IMPORT_ROOT") or Path.home())
        self.root_dir = Path(root_dir).expanduser().resolve()
        self.loader = GraphQLFileLoader()
        self.history: list[LoadRecord] = []

    def record(self, entry: Path, files: int, definitions: int) -> None:
        self.history.append(LoadRecord(entry=str(entry), files=files, definitions=definitions))
        del self.history[:-self.max_history]
