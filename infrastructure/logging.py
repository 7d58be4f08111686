import logging
import logging.handlers
import sys

import structlog

from infrastructure.config import Settings, settings

# Third-party loggers whose records are routed through our handlers.
_ROUTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")
# Chatty at DEBUG/INFO (every RPC round trip); only warnings are kept.
_QUIET_LOGGERS = ("web3", "aiohttp.access", "urllib3")

_configured = False


def setup_logging(config: Settings = settings) -> None:
    """Configure unified logging for structlog, uvicorn, and standard library.

    Safe to call more than once; only the first call installs handlers.
    """
    global _configured  # noqa: PLW0603
    if _configured:
        return

    config.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = config.log_dir / f"{config.app_env}.log"

    common_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.app_env == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *common_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=common_processors,
        processor=renderer,
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    file_handler = logging.handlers.TimedRotatingFileHandler(
        log_file,
        when="midnight",
        interval=1,
        backupCount=7,
    )
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(stream_handler)
    root_logger.addHandler(file_handler)
    root_logger.setLevel(config.log_level.upper())

    for logger_name in _ROUTED_LOGGERS:
        routed = logging.getLogger(logger_name)
        routed.handlers = [stream_handler, file_handler]
        routed.propagate = False

    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    _configured = True
