"""envprofiles package bootstrap (minimal).

Python uses ``__init__.py`` to treat this directory as a package. Logic lives
in the subpackages; version metadata lives in :mod:`envprofiles._initbase`.
"""

from ._initbase import __version__  # re-export version string

__all__ = ["__version__"]
