"""MongoDB connection handling."""

import logging
from typing import Optional

from .registry import Registry, redact_mongo_uri

logger = logging.getLogger(__name__)


async def connect_to_mongo(registry: Registry) -> None:
    """
    Connect to MongoDB.

    The driver handle opens its pool lazily, so this pings the server to
    surface connection problems at startup.

    Args:
        registry: Registry holding the driver handle and connection URL
    """
    logger.info(f"Connecting to MongoDB at {redact_mongo_uri(registry.url)}")

    # Test connection
    await registry.client.admin.command('ping')
    logger.info("Successfully connected to MongoDB")


async def close_database_connection(registry: Optional[Registry]) -> None:
    """Close MongoDB connection."""
    if registry is not None:
        logger.info("Closing MongoDB connection")
        registry.client.close()
