"""Runtime settings and logging setup for schemagate.

Settings are read from ``SCHEMAGATE_*`` environment variables once at process
start (``Settings()``) and passed explicitly to the components that need
them. Logging goes through structlog wrapped around standard library loggers,
so nothing is emitted until the host application configures handlers,
either its own or through ``configure_logging``.
"""

import logging
import sys
from typing import Optional

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ISSUER = "https://auth.myapp.com"


class Settings(BaseSettings):
    """Process-wide settings.

    Attributes:
        issuer: Expected ``iss`` claim for token validators
        log_level: Standard library level name
        log_json: Render log lines as JSON instead of console output
    """
    model_config = SettingsConfigDict(env_prefix="SCHEMAGATE_", frozen=True)

    issuer: str = Field(default=DEFAULT_ISSUER)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install the structlog processor chain and the stdlib root handler."""
    settings = settings or Settings()
    level = getattr(logging, settings.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if settings.log_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None):
    """Return a structlog logger backed by the stdlib logger ``name``.

    Output is routed through the standard library, so its handlers and
    levels decide what is written.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or "schemagate"),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


__all__ = [
    "DEFAULT_ISSUER",
    "Settings",
    "configure_logging",
    "get_logger",
]
