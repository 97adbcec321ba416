"""Loading and saving ``.lbd`` library files of named definitions."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from .core.environment import Environment
from .errors import LibraryError, ParseError
from .surface.parse import parse_library
from .surface.pretty import pretty

logger = logging.getLogger(__name__)

EXTENSION = ".lbd"


def library_file(name: str, lib_path: Path | str = ".") -> Path:
    """Resolve a library name to its file, appending the extension if missing."""

    filename = name if name.endswith(EXTENSION) else name + EXTENSION
    return Path(lib_path) / filename


def load_library(env: Environment, name: str, lib_path: Path | str = ".") -> list[str]:
    """Bind every definition of library ``name`` into ``env``.

    Returns the names that were bound, in file order. Nothing is bound when
    the file cannot be read or parsed.
    """

    path = library_file(name, lib_path)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LibraryError(f"Unable to load {name}: {exc}") from exc
    try:
        definitions = parse_library(source)
    except ParseError as exc:
        raise LibraryError(f"File corrupted: {path}: {exc}") from exc

    for definition in definitions:
        env.bind(definition.name, definition.term)
    logger.info("Loaded %d definitions from %s", len(definitions), path)
    return [definition.name for definition in definitions]


def dump_library(env: Environment, now: datetime | None = None) -> str:
    """Render ``env`` in library-file syntax."""

    now = now or datetime.now()
    lines = [f"# saved on {now:%Y-%m-%d %H:%M:%S}"]
    for name, term in env.definitions():
        lines.append(f"{name} = {pretty(term)};")
    return "\n".join(lines) + "\n"


def save_library(
    env: Environment,
    name: str,
    lib_path: Path | str = ".",
    overwrite: bool = False,
) -> Path:
    """Write every definition of ``env`` to library ``name``.

    An existing file is only replaced when ``overwrite`` is set.
    """

    path = library_file(name, lib_path)
    if path.exists() and not overwrite:
        raise LibraryError(f"A library named {name} already exists")
    try:
        path.write_text(dump_library(env), encoding="utf-8")
    except OSError as exc:
        raise LibraryError(f"Unable to save {name}: {exc}") from exc
    logger.info("Saved %d definitions to %s", len(env), path)
    return path


__all__ = ["EXTENSION", "library_file", "load_library", "dump_library", "save_library"]
