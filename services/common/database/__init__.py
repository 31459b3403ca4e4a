"""Database registry and connection utilities."""

from .mongodb import connect_to_mongo, close_database_connection
from .registry import (
    DEFAULT_DATABASE_NAME,
    DEFAULT_MONGO_URI,
    Registry,
    build_registry,
    redact_mongo_uri,
    resolve_mongo_uri,
)

__all__ = [
    "DEFAULT_DATABASE_NAME",
    "DEFAULT_MONGO_URI",
    "Registry",
    "build_registry",
    "redact_mongo_uri",
    "resolve_mongo_uri",
    "connect_to_mongo",
    "close_database_connection",
]
