import logging

import structlog


def configure_logging(level: str = "INFO"):
    """
    Sets up structlog once for every entry point (app factory, scripts, tests).
    Arguments:
        level (str): Minimum level name, e.g. `DEBUG` or `INFO`. Unknown names fall back to `INFO`.
    """
    log_level = logging.getLevelName(str(level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
