"""Resolve, publish and report the environment for the visualization node"""

import logging
import os
import shlex
import sys
from typing import Dict, List, MutableMapping, Optional, TextIO

from natively.core.config import KEYS, ConfigurationSet, profile_defaults, settings
from natively.core.exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)

SUMMARY_HEADER = "Environment variables set:"


def render_summary(config: ConfigurationSet) -> List[str]:
    """Header line followed by one KEY=value line per key"""
    return [SUMMARY_HEADER] + [f"{key}={value}" for key, value in config.items()]


def render_exports(config: ConfigurationSet) -> List[str]:
    """Shell `export` lines suitable for eval"""
    return [f"export {key}={shlex.quote(value)}" for key, value in config.items()]


class EnvironmentInitializer:
    """Turns profile defaults plus overrides into a published ConfigurationSet.

    Resolution is pure; ``publish`` is the only step that touches process
    state, and ``report`` the only one that writes output. ``initialize``
    runs all three in order.
    """

    def __init__(self, profile: Optional[str] = None, strict: bool = False):
        self.profile = profile or settings.PROFILE
        self.strict = strict
        self.defaults = profile_defaults(self.profile)

    def resolve(self, overrides: Optional[Dict[str, Optional[str]]] = None) -> ConfigurationSet:
        overrides = overrides or {}

        unknown = sorted(set(overrides) - set(KEYS))
        if unknown:
            logger.warning(f"Ignoring unrecognized keys: {', '.join(unknown)}")

        values = {}
        for key in KEYS:
            value = overrides.get(key)
            if value is None:
                value = self.defaults[key]
            else:
                logger.debug(f"{key} overridden")
            if self.strict and value == "":
                raise InvalidConfiguration(f"{key} resolved to an empty value", key=key)
            values[key] = value

        return ConfigurationSet(**values)

    def publish(self, config: ConfigurationSet,
                environ: Optional[MutableMapping[str, str]] = None) -> None:
        if environ is None:
            environ = os.environ
        for key, value in config.items():
            environ[key] = value
        logger.info(f"Published {len(KEYS)} variables (profile={self.profile})")

    def report(self, config: ConfigurationSet, stream: Optional[TextIO] = None) -> None:
        stream = stream or sys.stdout
        for line in render_summary(config):
            print(line, file=stream)

    def initialize(self, overrides: Optional[Dict[str, Optional[str]]] = None,
                   environ: Optional[MutableMapping[str, str]] = None,
                   stream: Optional[TextIO] = None) -> ConfigurationSet:
        config = self.resolve(overrides)
        self.publish(config, environ)
        self.report(config, stream)
        return config


def initialize(overrides: Optional[Dict[str, Optional[str]]] = None, *,
               profile: Optional[str] = None, strict: bool = False,
               environ: Optional[MutableMapping[str, str]] = None,
               stream: Optional[TextIO] = None) -> ConfigurationSet:
    """One-shot resolve, publish and report"""
    initializer = EnvironmentInitializer(profile=profile, strict=strict)
    return initializer.initialize(overrides, environ=environ, stream=stream)
