"""Override sources: KEY=VALUE pairs, dotenv files and the inherited environment"""

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from dotenv import dotenv_values

from natively.core.config import KEYS
from natively.core.exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)


def parse_assignments(pairs: Iterable[str]) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` strings; the value may itself contain '='"""
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise InvalidConfiguration(f"Expected KEY=VALUE, got {pair!r}")
        result[key] = value
    return result


def load_env_file(path: str) -> Dict[str, str]:
    """Recognized keys from a dotenv file. Unset (bare) keys are skipped."""
    env_path = Path(path)
    if not env_path.is_file():
        raise InvalidConfiguration(f"Env file not found: {path}")

    values = dotenv_values(env_path)
    result = {key: value for key, value in values.items() if key in KEYS and value is not None}
    logger.info(f"Loaded {len(result)} overrides from {env_path}")
    return result


def from_environment(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    if environ is None:
        environ = os.environ
    return {key: environ[key] for key in KEYS if key in environ}


def merge(*layers: Optional[Mapping[str, Optional[str]]]) -> Dict[str, str]:
    """Later layers win; None values never shadow earlier ones"""
    merged = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is not None:
                merged[key] = value
    return merged
