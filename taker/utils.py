"""Filesystem and parsing helpers shared by the taker configuration."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Base directory holding the taker's configuration files."""
    return Path.home() / ".coinswap"


def parse_field(value: Any, default: int, bits: int = 64) -> int:
    """Return *value* as an unsigned ``bits``-wide integer, else *default*.

    Missing keys (``None``), non-integers, booleans and out-of-range numbers
    all resolve to *default*.
    """
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < 0 or value >= 1 << bits:
        return default
    return value


def parse_toml(path: Path) -> dict[str, Any]:
    """Parse the TOML document at *path*.

    Raises OSError if the file cannot be read. If the document as a whole is
    not valid TOML, it is parsed one line at a time instead: ``[section]``
    headers and single-line ``key = value`` pairs that parse on their own are
    kept, everything else is skipped, and a repeated key keeps its last value.
    """
    text = Path(path).read_bytes().decode("utf-8", errors="replace")
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError:
        return _parse_lines(text)


def _parse_lines(text: str) -> dict[str, Any]:
    document: dict[str, Any] = {}
    current: dict[str, Any] | None = document
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        header = stripped.split("#", 1)[0].strip()
        if header.startswith("[") and header.endswith("]"):
            name = header.strip("[]").strip()
            if not name:
                current = None
                continue
            current = document.setdefault(name, {})
            if not isinstance(current, dict):
                current = document[name] = {}
            continue

        if current is None:
            continue
        try:
            current.update(tomllib.loads(stripped))
        except tomllib.TOMLDecodeError:
            continue
    return document


def write_default_config(path: Path, contents: str) -> bool:
    """Create *path* with *contents*, making parent directories as needed.

    Returns False without touching the file if it already exists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("x", encoding="utf-8") as f:
            f.write(contents)
    except FileExistsError:
        logger.debug("Config file appeared before it could be created: %s", path)
        return False
    return True
