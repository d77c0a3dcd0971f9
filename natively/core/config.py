from typing import Dict, Iterator, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from natively.core.exceptions import InvalidConfiguration

# Fixed publication order
KEYS: Tuple[str, ...] = ("MESHES_DIR", "SCENARIO_DIR", "REDIS_HOST", "REDIS_PORT")

DEFAULT_PROFILE = "campx"

PROFILES: Dict[str, Dict[str, str]] = {
    "campx": {
        "MESHES_DIR": "/home/endre/docker_ws/src/campx_demo_jun_2025/shared_folder/meshes",
        "SCENARIO_DIR": "/home/endre/docker_ws/src/campx_demo_jun_2025/shared_folder/transforms/scenario_final",
        "REDIS_HOST": "127.0.0.1",
        "REDIS_PORT": "6379",
    },
    "r2r": {
        "MESHES_DIR": "/home/endre/r2r_ws/src/r2r_ur_controller/preparation/scenario/meshes",
        "SCENARIO_DIR": "/home/endre/r2r_ws/src/r2r_ur_controller/preparation/scenario/transforms/scenario_2",
        "REDIS_HOST": "127.0.0.1",
        "REDIS_PORT": "6379",
    },
}


def profile_defaults(name: str) -> Dict[str, str]:
    """Return a copy of the built-in defaults for a profile"""
    try:
        return dict(PROFILES[name])
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise InvalidConfiguration(f"Unknown profile '{name}' (known: {known})") from None


class ConfigurationSet(BaseModel):
    """Resolved values for every recognized key. Values are opaque strings."""

    model_config = ConfigDict(frozen=True)

    MESHES_DIR: str = Field(..., description="Directory containing 3D mesh assets")
    SCENARIO_DIR: str = Field(..., description="Directory containing scenario transforms")
    REDIS_HOST: str = Field(..., description="Redis host")
    REDIS_PORT: str = Field(..., description="Redis port")

    def as_dict(self) -> Dict[str, str]:
        return {key: getattr(self, key) for key in KEYS}

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self.as_dict().items())


class Settings(BaseSettings):
    # Default profile
    PROFILE: str = DEFAULT_PROFILE

    # CLI behaviour
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    STRICT: bool = False

    # --check probe
    REDIS_CHECK_TIMEOUT: float = 2.0  # seconds

    model_config = SettingsConfigDict(
        env_prefix="NATIVELY_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


settings = Settings()
