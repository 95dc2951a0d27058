from __future__ import annotations

"""Runtime settings loader for envprofiles.

All environment reads happen here so the rest of the code consumes a single
``Settings`` object. The active profile set is resolved once and then passed
explicitly to whatever needs it; nothing else reads it from the process.

Resolution order for the active profiles:
1. Explicit ``profiles`` argument (e.g. the CLI ``--profile`` flag).
2. ``ENVPROFILES_ACTIVE`` env var (comma separated, e.g. ``dev,metrics``).
3. ``DEFAULT_PROFILE``.
"""

import os
import pathlib
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

from dotenv import load_dotenv

from envprofiles.logging_utils import parse_level

from .properties import InvalidConfigValue

DEFAULT_PROFILE = "dev"

PROFILES_ENV = "ENVPROFILES_ACTIVE"
PROPERTY_FILES_ENV = "ENVPROFILES_PROPERTY_FILES"
LOG_DIR_ENV = "ENVPROFILES_LOG_DIR"
LOG_LEVEL_ENV = "ENVPROFILES_LOG_LEVEL"


# ---------------------------------------------------------------------------
# Settings Dataclass
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class Settings:
    """Resolved runtime configuration."""

    active_profiles: FrozenSet[str] = field(default_factory=lambda: frozenset({DEFAULT_PROFILE}))
    property_files: Tuple[str, ...] = ()
    log_dir: str = "logs"
    log_level: str = "INFO"

    def ensure_dirs(self) -> None:
        pathlib.Path(self.log_dir).mkdir(parents=True, exist_ok=True)

    def asdict(self) -> Dict[str, Any]:  # convenience for logging/JSON
        data = asdict(self)
        data["active_profiles"] = sorted(self.active_profiles)
        return data


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------
def parse_profiles(raw: Union[str, Iterable[str], None]) -> FrozenSet[str]:
    """
    Split comma separated profile labels.

    >>> sorted(parse_profiles("dev, qa,,"))
    ['dev', 'qa']
    >>> sorted(parse_profiles(["dev,prod", "qa"]))
    ['dev', 'prod', 'qa']
    """
    if raw is None:
        return frozenset()
    chunks = [raw] if isinstance(raw, str) else list(raw)
    labels = set()
    for chunk in chunks:
        labels.update(p.strip() for p in chunk.split(",") if p.strip())
    return frozenset(labels)


def _split_paths(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(p for p in raw.split(os.pathsep) if p.strip())


# ---------------------------------------------------------------------------
# Settings Builders
# ---------------------------------------------------------------------------
def settings_from_env(
    profiles: Union[str, Iterable[str], None] = None,
    property_files: Optional[Iterable[str]] = None,
) -> Settings:
    """Assemble settings from explicit args + env vars + defaults."""
    s = Settings()

    # Profiles -------------------------------------------------------------
    active = parse_profiles(profiles)
    if not active:
        active = parse_profiles(os.getenv(PROFILES_ENV))
    if active:
        s.active_profiles = active

    # Property files -------------------------------------------------------
    if property_files:
        s.property_files = tuple(str(p) for p in property_files)
    else:
        s.property_files = _split_paths(os.getenv(PROPERTY_FILES_ENV))

    # Logs -----------------------------------------------------------------
    s.log_dir = os.getenv(LOG_DIR_ENV, s.log_dir)
    s.log_level = os.getenv(LOG_LEVEL_ENV, s.log_level).strip().upper()
    try:
        parse_level(s.log_level)
    except ValueError:
        raise InvalidConfigValue(LOG_LEVEL_ENV, s.log_level, "unknown log level") from None

    return s


def load_settings(
    profiles: Union[str, Iterable[str], None] = None,
    property_files: Optional[Iterable[str]] = None,
    *,
    dotenv: bool = True,
) -> Settings:
    """Public loader: returns a fully-initialized :class:`Settings` object.

    ``.env`` in the working directory is loaded first; variables already in
    the environment are not overridden by it.
    """
    if dotenv:
        load_dotenv(override=False)
    settings = settings_from_env(profiles, property_files)
    settings.ensure_dirs()
    return settings
