from __future__ import annotations

"""envprofiles CLI (module invocation).

Usage:
    python -m envprofiles.cli.profile_cli --profile dev
    python -m envprofiles.cli.profile_cli --profile prod --props jms.properties

Resolves the data source for the active profiles and prints its connection
info. When property files are given (``--props`` or
``ENVPROFILES_PROPERTY_FILES``) the broker configuration is bound and printed
too, password masked.

Exit codes: 0 on success, 2 on a startup configuration error.
"""

import argparse
import sys

from envprofiles.config import ConfigError, load_broker_properties, load_settings
from envprofiles.datasources import build_datasource_registry, datasource_for
from envprofiles.jms import FakeJmsBroker
from envprofiles.logging_utils import get_logger
from envprofiles.registry import ProfileError

EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve profile-specific components")
    parser.add_argument(
        "--profile",
        action="append",
        dest="profiles",
        help="active profile (repeatable or comma separated): dev | qa | prod",
    )
    parser.add_argument(
        "--props",
        action="append",
        dest="property_files",
        metavar="FILE",
        help="broker property file; later files override earlier ones",
    )
    parser.add_argument("--list", action="store_true", help="list registered profile tags and exit")
    return parser


def main(argv=None) -> int:
    """Parse args, load settings, bootstrap logging, resolve and report."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(profiles=args.profiles, property_files=args.property_files)
    except ConfigError as exc:
        # logging is not configured yet
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    log = get_logger("envprofiles", log_dir=settings.log_dir, level=settings.log_level)
    log.info("Settings: %s", settings.asdict())

    registry = build_datasource_registry()
    if args.list:
        for tag in registry.tags():
            print(tag)
        return 0

    try:
        datasource = datasource_for(settings.active_profiles, registry)
        print(datasource.get_connection_info())

        if settings.property_files:
            broker = FakeJmsBroker.from_properties(load_broker_properties(*settings.property_files))
            log.info("Broker: %s", broker.describe())
            print(repr(broker))
    except (ProfileError, ConfigError) as exc:
        log.error("Startup aborted: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
