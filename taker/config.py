"""Taker config: refund locktimes, connection attempts, sleep delays and timeouts."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, NamedTuple

from taker.utils import get_config_dir, parse_field, parse_toml, write_default_config

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "taker.toml"
SECTION = "taker_config"


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

class FieldSpec(NamedTuple):
    """A config key and the unsigned integer width it must fit in."""

    name: str
    bits: int


FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("refund_locktime", 16),
    FieldSpec("refund_locktime_step", 16),
    FieldSpec("first_connect_attempts", 32),
    FieldSpec("first_connect_sleep_delay_sec", 64),
    FieldSpec("first_connect_attempt_timeout_sec", 64),
    FieldSpec("reconnect_attempts", 32),
    FieldSpec("reconnect_short_sleep_delay", 64),
    FieldSpec("reconnect_long_sleep_delay", 64),
    FieldSpec("short_long_sleep_delay_transition", 32),
    FieldSpec("reconnect_attempt_timeout_sec", 64),
)


@dataclass(frozen=True)
class TakerConfig:
    """Taker settings (maps to the ``[taker_config]`` section of ``taker.toml``)."""

    refund_locktime: int = 48            # blocks
    refund_locktime_step: int = 48       # blocks

    first_connect_attempts: int = 5
    first_connect_sleep_delay_sec: int = 1
    first_connect_attempt_timeout_sec: int = 20

    reconnect_attempts: int = 3200
    reconnect_short_sleep_delay: int = 10
    reconnect_long_sleep_delay: int = 60
    short_long_sleep_delay_transition: int = 60  # attempt index
    reconnect_attempt_timeout_sec: int = 300

    def to_dict(self) -> dict[str, int]:
        return {spec.name: getattr(self, spec.name) for spec in FIELDS}

    @classmethod
    def from_section(cls, section: Mapping[str, Any]) -> TakerConfig:
        """Build a config from a parsed section, defaulting bad or missing keys."""
        defaults = cls()
        return cls(**{
            spec.name: parse_field(
                section.get(spec.name), getattr(defaults, spec.name), spec.bits
            )
            for spec in FIELDS
        })

    @classmethod
    def new(cls, file_path: Path | str | None = None) -> TakerConfig:
        """Resolve the taker config, writing a default file first if needed.

        Raises OSError if the file cannot be created or read.
        """
        path = resolve_config_path(file_path)
        if not path.exists():
            logger.warning(
                "Taker config file not found, creating default config file at path: %s",
                path,
            )
            write_default_config(path, DEFAULT_CONFIG_TOML)

        document = parse_toml(path)
        section = document.get(SECTION)
        if not isinstance(section, dict):
            section = {}

        config = cls.from_section(section)
        logger.info("Loaded taker config from %s", path)
        return config


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def to_toml(config: TakerConfig | None = None) -> str:
    """Render *config* (default: built-in defaults) as a ``taker.toml`` document."""
    values = (config or TakerConfig()).to_dict()
    lines = [f"[{SECTION}]"]
    lines.extend(f"{name} = {value}" for name, value in values.items())
    return "\n".join(lines) + "\n"


DEFAULT_CONFIG_TOML = to_toml()


# ---------------------------------------------------------------------------
# Config I/O
# ---------------------------------------------------------------------------

def resolve_config_path(
    file_path: Path | str | None = None,
    cwd: Path | None = None,
    config_dir: Path | None = None,
) -> Path:
    """Pick the config file: explicit path, then ``./taker.toml``, then the config dir."""
    if file_path is not None:
        return Path(file_path)
    local = (cwd or Path.cwd()) / CONFIG_FILENAME
    if local.exists():
        return local
    return (config_dir or get_config_dir()) / CONFIG_FILENAME

def save_taker_config(path: Path | str, config: TakerConfig) -> Path:
    """Write *config* to *path*, replacing any existing file. Creates parent dirs."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_toml(config))
    logger.info("Saved taker config to %s", path)
    return path
