# mirror_tools/logging_setup.py
from __future__ import annotations

import logging
import logging.config

LOGGER_NAME = "mirror_tools"


class DefaultContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "site"):
            record.site = "-"
        if not hasattr(record, "step"):
            record.step = "-"
        return True


def setup_logging(verbosity: int = 1) -> None:
    """
    Configure a consistent logger for the project.
    - INFO by default, DEBUG when verbosity >= 2
    - Always prints site and step so logs are grep-able.
    """
    level = logging.DEBUG if verbosity >= 2 else logging.INFO

    fmt = (
        "%(asctime)s %(levelname)s "
        "site=%(site)s step=%(step)s "
        "%(message)s"
    )

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"std": {"format": fmt}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "std",
                "level": level,
                "filters": ["default_context"]
            }
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["console"], "level": level, "propagate": False}
        },
        "filters": {
            "default_context": {
                "()": DefaultContextFilter
            }
        },
    })


class _Adapter(logging.LoggerAdapter):
    """LoggerAdapter that always stamps site and step on the record."""

    def process(self, msg: str, kwargs):
        kwargs["extra"] = {**(kwargs.get("extra") or {}), **self.extra}
        return msg, kwargs


def get_logger(*, step: str, site: str = "-") -> logging.LoggerAdapter:
    """
    Create a logger bound to step + site.
    Usage:
        log = get_logger(step="rewrite", site="IslamicBlogSite")
        log.info("fixed paths", extra={"depth": 2})
    """
    base = logging.getLogger(LOGGER_NAME)
    return _Adapter(base, extra={"step": step, "site": site})
