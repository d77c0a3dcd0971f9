"""Reachability probe for the configured Redis endpoint"""

import logging
from typing import Optional

import redis

from natively.core.config import settings

logger = logging.getLogger(__name__)


def check_connection(host: str, port: str, timeout: Optional[float] = None) -> bool:
    """Return True if the endpoint answers PING. Never raises."""
    if timeout is None:
        timeout = settings.REDIS_CHECK_TIMEOUT

    try:
        port_number = int(port)
    except (TypeError, ValueError):
        logger.error(f"Redis port is not a number: {port!r}")
        return False

    client = redis.Redis(
        host=host,
        port=port_number,
        socket_connect_timeout=timeout,
        socket_timeout=timeout,
    )
    try:
        client.ping()
        logger.info(f"Successfully connected to Redis at {host}:{port_number}")
        return True
    except redis.RedisError as e:
        logger.error(f"Redis health check failed for {host}:{port_number}: {e}")
        return False
    finally:
        client.close()
