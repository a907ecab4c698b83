"""Client-side render configuration.

Holds the settings the character subsystem needs from the host process.
Loading them from a file or the environment is the host's job; this module
only validates a plain mapping and applies defaults.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

from character_render.fetch import characters_endpoint
from character_render.logging_setup import LOG_FORMATS, configure_logging, log_level
from character_render.types import RenderQuality


@dataclass(frozen=True)
class RenderConfig:
    """Settings for fetching and logging character assets.

    Attributes:
        quality: Asset quality requested from the server.
        client_version: Sent as the ``v`` query parameter for cache busting.
        log_level: Level for the ``character_render`` logger.
        log_format: ``"text"`` or ``"json"``.
    """

    quality: RenderQuality = RenderQuality.REGULAR
    client_version: str = "dev"
    log_level: str = "INFO"
    log_format: str = "text"

    @staticmethod
    def from_mapping(values: Mapping[str, Any]) -> "RenderConfig":
        """Build a config from a mapping; unknown keys are ignored.

        Raises:
            ValueError: If ``quality``, ``log_level`` or ``log_format`` is not a
                known value.
        """
        known = {f.name for f in fields(RenderConfig)}
        kwargs = {k: v for k, v in values.items() if k in known and v is not None}
        if "quality" in kwargs:
            kwargs["quality"] = RenderQuality(kwargs["quality"])
        if kwargs.get("log_format", "text") not in LOG_FORMATS:
            raise ValueError(f"Unknown log format: {kwargs['log_format']}")
        if "client_version" in kwargs:
            kwargs["client_version"] = str(kwargs["client_version"])
        if "log_level" in kwargs:
            kwargs["log_level"] = str(kwargs["log_level"])
            log_level(kwargs["log_level"])
        return RenderConfig(**kwargs)

    def endpoint(self) -> str:
        return characters_endpoint(self.quality, self.client_version)

    def apply_logging(self) -> logging.Handler:
        """Configure the package logger from ``log_level`` and ``log_format``."""
        return configure_logging(self)
