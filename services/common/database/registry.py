"""Database registry: driver handle, connection URL and registered models."""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorClient

logger = logging.getLogger(__name__)

DEFAULT_MONGO_URI = "mongodb://localhost:27017/testdb"
DEFAULT_DATABASE_NAME = "testdb"

ModelFactory = Callable[[AsyncIOMotorClient], Any]


def resolve_mongo_uri(value: Optional[str]) -> str:
    """Return the given URI, or the default when it is unset or empty."""
    if not value:
        return DEFAULT_MONGO_URI
    return value


def redact_mongo_uri(url: str) -> str:
    """Mask the credentials of a MongoDB URI for logging."""
    scheme, sep, rest = url.partition("://")
    if not sep:
        return url
    hosts, slash, tail = rest.partition("/")
    if "@" not in hosts:
        return url
    return f"{scheme}://***@{hosts.rpartition('@')[2]}{slash}{tail}"


class Registry:
    """
    Process-wide database registry.

    Built once at startup by build_registry and passed to whatever needs
    database access. Client, URL and models are read-only.
    """

    def __init__(self, client: AsyncIOMotorClient, url: str, models: Dict[str, Any]):
        self._client = client
        self._url = url
        self._models: Mapping[str, Any] = MappingProxyType(dict(models))

    @property
    def client(self) -> AsyncIOMotorClient:
        return self._client

    @property
    def url(self) -> str:
        return self._url

    @property
    def models(self) -> Mapping[str, Any]:
        return self._models

    def model(self, name: str) -> Any:
        """
        Get a registered model by its logical name.

        Raises:
            KeyError: If no model is registered under that name
        """
        return self.models[name]

    def __repr__(self) -> str:
        return f"Registry(url={redact_mongo_uri(self.url)!r}, models={list(self.models)!r})"


def build_registry(
    url: Optional[str],
    factories: Mapping[str, ModelFactory],
    client_class: Callable[[str], AsyncIOMotorClient] = AsyncIOMotorClient,
) -> Registry:
    """
    Build the database registry.

    Creates a single driver handle for the resolved URL and calls every
    model factory once with it. No network I/O happens here; the driver
    connects lazily.

    Args:
        url: MongoDB connection URI, falls back to DEFAULT_MONGO_URI if empty
        factories: Logical model name to factory table
        client_class: Driver handle constructor

    Returns:
        Registry: The populated registry

    Raises:
        Exception: Whatever a model factory raises; the handle is closed first
    """
    url = resolve_mongo_uri(url)
    client = client_class(url)

    models: Dict[str, Any] = {}
    try:
        for name, factory in factories.items():
            models[name] = factory(client)
            logger.debug(f"Registered model: {name}")
    except Exception as e:
        logger.error(f"Failed to build database registry: {e}")
        client.close()
        raise

    logger.info(f"Database registry built with models: {', '.join(models) or 'none'}")
    return Registry(client=client, url=url, models=models)
