"""Environment initializer for the mesh/scenario visualization node"""

__version__ = "1.0.0"

# Import key components for easier access
from natively.core.config import settings, ConfigurationSet
from natively.core.exceptions import InvalidConfiguration
from natively.services.initializer import EnvironmentInitializer, initialize

__all__ = [
    "settings",
    "ConfigurationSet",
    "InvalidConfiguration",
    "EnvironmentInitializer",
    "initialize",
]
