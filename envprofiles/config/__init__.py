"""Configuration subsystem (public API).

Two concerns live here:

* :mod:`envprofiles.config.settings`   -> runtime settings (active profiles,
  property files, log dir) resolved from env vars and ``.env``.
* :mod:`envprofiles.config.properties` -> externalized broker properties
  (property files overlaid by env vars).
"""

from .properties import (
    BrokerProperties,
    ConfigError,
    InvalidConfigValue,
    MissingConfigKey,
    PropertyFileNotFound,
    PropertyFileUnreadable,
    env_var_name,
    load_broker_properties,
    read_property_files,
)
from .settings import Settings, load_settings, parse_profiles, settings_from_env

__all__ = [
    "BrokerProperties",
    "ConfigError",
    "InvalidConfigValue",
    "MissingConfigKey",
    "PropertyFileNotFound",
    "PropertyFileUnreadable",
    "Settings",
    "env_var_name",
    "load_broker_properties",
    "load_settings",
    "parse_profiles",
    "read_property_files",
    "settings_from_env",
]
