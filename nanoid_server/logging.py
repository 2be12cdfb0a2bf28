import logging

from opentelemetry.instrumentation.logging import LoggingInstrumentor

from nanoid_server.config import LoggingSettings

# Loggers configured alongside the root logger.
KNOWN_LOGGERS = ["uvicorn", "uvicorn.error", "uvicorn.access", "nanoid_server"]


def setup_logging(settings: LoggingSettings):
    """Setup all logging configurations based on settings."""
    if not settings.verbose:
        # Suppress all logging output when not verbose
        logging.getLogger().setLevel(logging.CRITICAL)
        for logger_name in KNOWN_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.CRITICAL)
        return

    # Trace and span ids end up in every record through the instrumentor's format
    LoggingInstrumentor().instrument(set_logging_format=True)

    logging.getLogger().setLevel(logging.INFO)

    # Let uvicorn and our own loggers propagate to the root handlers
    for logger_name in KNOWN_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.INFO)
        logger.handlers.clear()
        logger.propagate = True
