"""Parse `# import A, B from "./file.graphql"` directives."""

from __future__ import annotations

import os
import re
from pathlib import Path

from sdl_import.errors import ImportSyntaxError
from sdl_import.models import WILDCARD, ImportStatement

_IMPORT_PREFIXES = ("# import", "#import")
_IMPORT_RE = re.compile(r"""(?P<types>.+?)\s+from\s+(?P<quote>["'])(?P<path>.+)(?P=quote)$""")
_LINE_SPLIT_RE = re.compile(r"\r?\n")


def is_import_line(line: str) -> bool:
    return line.strip().startswith(_IMPORT_PREFIXES)


def resolve_import_path(base_path: Path | str, specified: str) -> Path:
    """Resolve an import path against the importing file's directory."""
    # Absolute paths ignore base_path but are normalised too
    return Path(os.path.normpath(Path(base_path) / specified))


def parse_import_statements(
    base_path: Path | str,
    file_contents: str,
    file_name: Path | None = None,
) -> list[ImportStatement]:
    """Collect every import directive in a file.

    Raises ImportSyntaxError on the first directive line that does not
    match `<names> from "<path>"`.
    """
    imports: list[ImportStatement] = []

    for line_number, raw_line in enumerate(_LINE_SPLIT_RE.split(file_contents), start=1):
        line = raw_line.strip()
        if not is_import_line(line):
            continue

        import_line = line[line.index("import") + len("import"):].strip()
        match = _IMPORT_RE.match(import_line)
        if not match:
            raise ImportSyntaxError("Incorrect import syntax", file_name, line_number, line)

        types = [t.strip() for t in match.group("types").split(",")]
        for type_name in types:
            if not type_name:
                raise ImportSyntaxError("Empty type name in import", file_name, line_number, line)
            if type_name == WILDCARD:
                raise ImportSyntaxError(
                    f"{WILDCARD!r} is not an importable type name", file_name, line_number, line,
                )

        imports.append(ImportStatement(
            types=types,
            file_name=resolve_import_path(base_path, match.group("path").strip()),
            line_number=line_number,
        ))

    return imports
