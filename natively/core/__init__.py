"""Core Package - Configuration and Utilities"""

from natively.core.config import settings, ConfigurationSet, KEYS, PROFILES
from natively.core.exceptions import InvalidConfiguration
from natively.core.redis_client import check_connection

__all__ = [
    "settings",
    "ConfigurationSet",
    "KEYS",
    "PROFILES",
    "InvalidConfiguration",
    "check_connection",
]
