"""Per-profile data source implementations.

Each deployment environment gets its own :class:`FakeDataSource`. The startup
routine :func:`build_datasource_registry` registers all of them explicitly and
freezes the registry; consumers then call :func:`datasource_for` with the
active profiles they were started with.
"""

from typing import Iterable, Optional, Protocol, Union

from envprofiles.registry import CapabilityRegistry, ProfileResolver


class FakeDataSource(Protocol):
    def get_connection_info(self) -> str: ...


class DevDataSource:
    def get_connection_info(self) -> str:
        return "I'm dev data source"


class QADataSource:
    def get_connection_info(self) -> str:
        return "I'm QA data source"


class ProdDataSource:
    def get_connection_info(self) -> str:
        return "I'm prod data source"


def build_datasource_registry() -> CapabilityRegistry:
    """Register the dev / qa / prod data sources and freeze the registry."""
    registry = CapabilityRegistry("datasource")
    registry.register("dev", DevDataSource())
    registry.register("qa", QADataSource())
    registry.register("prod", ProdDataSource())
    return registry.freeze()


def datasource_for(
    active_profiles: Union[str, Iterable[str], None],
    registry: Optional[CapabilityRegistry] = None,
) -> FakeDataSource:
    """Resolve the data source for a consumer started with ``active_profiles``."""
    if registry is None:
        registry = build_datasource_registry()
    return ProfileResolver(registry).resolve(active_profiles)
