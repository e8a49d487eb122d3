"""Service configuration.

Settings is a frozen dataclass, immutable after creation. Values come
from keyword arguments or from ``SEGMENT_ROUTER_*`` environment variables.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from segment_router.exceptions import ConfigurationError

ENV_PREFIX = "SEGMENT_ROUTER_"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


@dataclass(frozen=True)
class Settings:
    """Settings for the sample service and its HTTP transport.

    All fields have defaults. Override what you need::

        settings = Settings(service_name="users-api", port=9000)
    """

    # Response content
    service_name: str = "segment-router"
    greeting: str = "Hello from segment-router"
    user_name: str = "Sample User"
    user_role: str = "Developer"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Unset variables keep their defaults, e.g. ``SEGMENT_ROUTER_PORT=9000``.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        for name in ("service_name", "greeting", "user_name", "user_role", "host"):
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw

        raw_port = env.get(ENV_PREFIX + "PORT")
        if raw_port is not None:
            try:
                values["port"] = int(raw_port)
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_PREFIX}PORT must be an integer, got '{raw_port}'"
                ) from None

        raw_level = env.get(ENV_PREFIX + "LOG_LEVEL")
        if raw_level is not None:
            level = raw_level.strip().upper()
            if level not in LOG_LEVELS:
                raise ConfigurationError(
                    f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, "
                    f"got '{raw_level}'"
                )
            values["log_level"] = level

        return cls(**values)  # type: ignore[arg-type]
