"""Fake message broker bound from externalized properties."""

from typing import Any, Dict

from envprofiles.config.properties import BrokerProperties


class FakeJmsBroker:
    """Holds the connection values a real broker client would be built from."""

    def __init__(self, url: str, port: int, user: str, password: str) -> None:
        self.url = url
        self.port = port
        self.user = user
        self.password = password

    @classmethod
    def from_properties(cls, props: BrokerProperties) -> "FakeJmsBroker":
        return cls(url=props.server, port=props.port, user=props.user, password=props.password)

    def describe(self) -> Dict[str, Any]:
        return {"url": self.url, "port": self.port, "user": self.user, "password": "******"}

    def __repr__(self) -> str:
        return f"FakeJmsBroker(url={self.url!r}, port={self.port}, user={self.user!r}, password='******')"
