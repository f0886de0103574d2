"""Structured logging setup."""

import logging

import structlog

from electoral_access.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the package.

    Renders JSON in production and a console format elsewhere, filtered
    at the configured level.

    Args:
        settings: Settings to read from; defaults to the cached settings
    """
    settings = settings or get_settings()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if settings.render_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


__all__ = [
    "configure_logging",
]
