"""envprofiles base package metadata.

Kept apart from ``__init__.py`` so importing the package has no side effects.

Layout:
- :mod:`envprofiles.registry`    -> capability registry + profile resolver
- :mod:`envprofiles.datasources` -> per-profile data source implementations
- :mod:`envprofiles.config`      -> settings + externalized broker properties
- :mod:`envprofiles.jms`         -> fake broker bound from the properties
"""

from importlib import metadata as _metadata

try:  # When installed via pip / build backend
    __version__ = _metadata.version("envprofiles")
except Exception:  # Local src checkout fallback
    __version__ = "0.0.0-dev"
