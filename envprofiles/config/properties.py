from __future__ import annotations

"""Externalized broker properties.

Four values (server, port, user, password) are read from one or more flat
``key=value`` property files and then overlaid by environment variables:

1. **Environment variables** – highest precedence.
2. **Property files** – merged in the order given; later files win.

There is no default for any of the four keys. A key missing from both sources
is a startup error (:class:`MissingConfigKey`).

Property files are parsed with python-dotenv (``#`` comments, optional single
or double quotes). Interpolation is off so passwords containing ``$`` come
through verbatim.

Env var naming: ``guru.jms.port`` -> ``GURU_JMS_PORT``.
"""

import logging
import os
import pathlib
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "guru.jms"
BROKER_FIELDS = ("server", "port", "user", "password")

PathLike = Union[str, "os.PathLike[str]"]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
class ConfigError(RuntimeError):
    """Base class for fatal startup configuration problems."""


class MissingConfigKey(ConfigError, KeyError):
    """A required key resolved from neither the environment nor a property file."""

    def __init__(self, key: str, env_var: str) -> None:
        self.key = key
        self.env_var = env_var
        super().__init__(
            f"Required configuration key {key!r} is not set "
            f"(property file or env var {env_var})"
        )

    def __str__(self) -> str:  # KeyError would repr() the message otherwise
        return self.args[0]


class InvalidConfigValue(ConfigError, ValueError):
    """A key resolved, but its value cannot be bound to the target type."""

    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid value {value!r} for {key!r}: {reason}")


class PropertyFileNotFound(ConfigError, FileNotFoundError):
    """A property file named at startup does not exist."""

    def __init__(self, path: PathLike) -> None:
        self.path = str(path)
        super().__init__(f"Property file not found: {self.path}")

    def __str__(self) -> str:
        return self.args[0]


class PropertyFileUnreadable(ConfigError):
    """A property file exists but cannot be read or decoded as UTF-8."""

    def __init__(self, path: PathLike, reason: Exception) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read property file {self.path}: {reason}")


# ---------------------------------------------------------------------------
# Bound configuration object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class BrokerProperties:
    """Resolved broker configuration. Values are exposed unchanged."""

    server: str
    port: int
    user: str
    password: str

    def asdict(self, *, mask_password: bool = True) -> Dict[str, Any]:  # convenience for logging
        data = asdict(self)
        if mask_password:
            data["password"] = "******"
        return data


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------
def env_var_name(key: str) -> str:
    """
    Environment variable that overrides ``key``.

    >>> env_var_name("guru.jms.port")
    'GURU_JMS_PORT'
    >>> env_var_name("guru.jms.some-key")
    'GURU_JMS_SOME_KEY'
    """
    return re.sub(r"[.\-]", "_", key).upper()


def read_property_files(*paths: PathLike) -> Dict[str, str]:
    """Parse and merge property files. Later files override earlier ones.

    Keys listed without a value (``key`` on its own line) are dropped.
    """
    merged: Dict[str, str] = {}
    for path in paths:
        p = pathlib.Path(path)
        if not p.is_file():
            raise PropertyFileNotFound(p)
        try:
            values = dotenv_values(p, interpolate=False, encoding="utf-8")
        except (UnicodeDecodeError, OSError) as exc:
            raise PropertyFileUnreadable(p, exc) from exc
        loaded = {k: v for k, v in values.items() if v is not None}
        logger.debug("Loaded %d properties from %s", len(loaded), p)
        merged.update(loaded)
    return merged


def lookup(
    key: str,
    file_values: Mapping[str, str],
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Resolve one key: env var first, then property files."""
    if environ is None:
        environ = os.environ
    env_name = env_var_name(key)
    if env_name in environ:
        logger.debug("Key %s taken from env var %s", key, env_name)
        return environ[env_name]
    if key in file_values:
        return file_values[key]
    raise MissingConfigKey(key, env_name)


def _parse_port(key: str, raw: str) -> int:
    digits = raw.strip()
    if not re.fullmatch(r"[0-9]+", digits):
        raise InvalidConfigValue(key, raw, "port must be a plain decimal integer")
    port = int(digits)
    if not 1 <= port <= 65535:
        raise InvalidConfigValue(key, raw, "port must be between 1 and 65535")
    return port


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------
def load_broker_properties(
    *paths: PathLike,
    prefix: str = DEFAULT_PREFIX,
    environ: Optional[Mapping[str, str]] = None,
) -> BrokerProperties:
    """Bind ``<prefix>.server|port|user|password`` into :class:`BrokerProperties`.

    Every key is looked up (and reported) before binding, so the first missing
    key in ``BROKER_FIELDS`` order is the one named in the error.
    """
    file_values = read_property_files(*paths)
    raw = {name: lookup(f"{prefix}.{name}", file_values, environ) for name in BROKER_FIELDS}

    props = BrokerProperties(
        server=raw["server"],
        port=_parse_port(f"{prefix}.port", raw["port"]),
        user=raw["user"],
        password=raw["password"],
    )
    logger.info("Bound broker properties: %s", props.asdict())
    return props
