"""Exceptions raised by the loader."""

from __future__ import annotations

from pathlib import Path


class SDLImportError(Exception):
    """Base class for loader errors."""


class ImportSyntaxError(SDLImportError, ValueError):
    """An import directive line does not match `<names> from "<path>"`."""

    def __init__(self, message: str, file_name: Path | None = None,
                 line_number: int = 0, line: str = ""):
        self.file_name = file_name
        self.line_number = line_number
        self.line = line
        location = ""
        if file_name is not None:
            location = f"{file_name}:{line_number}: " if line_number else f"{file_name}: "
        super().__init__(f"{location}{message}")


class ImportOutsideRootError(SDLImportError):
    """An import points at a file outside the allowed root directory."""

    def __init__(self, file_name: Path, root_dir: Path):
        self.file_name = file_name
        self.root_dir = root_dir
        super().__init__(f"{file_name.name}: import outside the allowed root refused")
