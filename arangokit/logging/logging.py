"""
Structured Logging
==================

Optional structlog configuration for applications using arangokit.

Library modules only ever log through ``logging.getLogger(__name__)``;
nothing is configured on import. ``LogManager.setup`` routes those records
(and structlog loggers) to stderr and, when a directory is given, to
rotating log files.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import threading

import structlog


def _validate_log_level(log_level: str) -> int:
    """
    Validate and convert log level string to numeric value.

    Args:
        log_level: Log level name (case-insensitive)

    Returns:
        Numeric logging level

    Raises:
        ValueError: If log_level is not a valid logging level name
    """
    level_name = str(log_level).upper()

    valid_levels = {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL", "FATAL"}
    if level_name not in valid_levels:
        raise ValueError(
            f"Invalid log level: '{log_level}'. "
            f"Must be one of: {', '.join(sorted(valid_levels))}"
        )

    return getattr(logging, level_name)


# Global flag and lock for thread-safe initialization
_logging_initialized = False
_init_lock = threading.Lock()


def _file_handlers(log_dir: Path, numeric_level: int) -> list[logging.Handler]:
    log_dir.mkdir(parents=True, exist_ok=True)

    # Main log file with rotation (10MB, keep 5 backups)
    main_handler = RotatingFileHandler(
        log_dir / "arangokit.log",
        maxBytes=10_485_760,
        backupCount=5
    )
    main_handler.setLevel(numeric_level)

    # Error log file (10MB, keep 3 backups)
    error_handler = RotatingFileHandler(
        log_dir / "errors.log",
        maxBytes=10_485_760,
        backupCount=3
    )
    error_handler.setLevel(logging.ERROR)

    return [main_handler, error_handler]


class LogManager:
    """
    Centralized logging configuration using structlog.

    Features:
    - Structured JSON (or console) rendering
    - Optional rotating log files
    - Bound context per component
    """

    @staticmethod
    def setup(log_level: str = "INFO", log_dir: str | Path | None = None, json: bool = True):
        """
        Setup logging configuration. Only the first call has any effect.

        Args:
            log_level: Default log level
            log_dir: Directory for rotating log files (None = stderr only)
            json: Render JSON lines instead of the console format
        """
        global _logging_initialized

        # Fast path: already initialized
        if _logging_initialized:
            return

        with _init_lock:
            # Double-check after acquiring lock
            if _logging_initialized:
                return

            numeric_level = _validate_log_level(log_level)

            logging.basicConfig(
                level=numeric_level,
                format='%(message)s'
            )

            root_logger = logging.getLogger()
            if log_dir is not None:
                for handler in _file_handlers(Path(log_dir), numeric_level):
                    root_logger.addHandler(handler)

            renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

            structlog.configure(
                processors=[
                    structlog.stdlib.filter_by_level,
                    structlog.stdlib.add_logger_name,
                    structlog.stdlib.add_log_level,
                    structlog.stdlib.PositionalArgumentsFormatter(),
                    structlog.processors.TimeStamper(fmt="iso"),
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                    structlog.processors.UnicodeDecoder(),
                    renderer,
                ],
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )

            _logging_initialized = True

            logger = structlog.get_logger("arangokit")
            logger.info(
                "logging_initialized",
                log_dir=str(log_dir) if log_dir is not None else None,
                level=log_level,
            )

    @staticmethod
    def get_logger(component: str, **context):
        """
        Get a logger bound to a component name and extra context.

        Args:
            component: Name of the calling component (e.g. ``"ingest"``)
            **context: Additional key/value pairs bound to every event

        Returns:
            Configured structlog logger
        """
        if not _logging_initialized:
            LogManager.setup()

        return structlog.get_logger(component).bind(component=component, **context)
