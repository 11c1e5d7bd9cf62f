"""Logging utilities for Fontsubsetter."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Marks handlers installed by configure_logging so reconfiguring replaces them
_HANDLER_MARKER = "_fontsubsetter_handler"


@dataclass
class ProcessingStats:
    """Statistics from a batch run."""

    processed_count: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    file_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_file_time_ms(self) -> float | None:
        """Average engine time per successful font."""
        if not self.file_timings_ms:
            return None
        return sum(self.file_timings_ms) / len(self.file_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_MARKER, True)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_MARKER, True)
    root_logger.addHandler(console_handler)

    # fontTools reports every dropped table and glyph at INFO/WARNING
    logging.getLogger("fontTools").setLevel(logging.ERROR)

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
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("fontsubsetter")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


def get_logger(name: str = "fontsubsetter") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for a fontsubsetter component."""
    return structlog.get_logger(name)


class BatchLogger:
    """Logger for tracking batch progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_file_start(self, file_name: str) -> None:
        """Log start of font processing."""
        self._logger.debug("Processing font", font=file_name)

    def log_file_queued(self, file_name: str) -> None:
        """Log a font handed to a worker process."""
        self._logger.debug("Font queued", font=file_name)

    def log_file_complete(
        self,
        file_name: str,
        output_file: str,
        reduction: float,
        duration_ms: float,
    ) -> None:
        """Log successful font processing."""
        self._logger.info(
            "Font subsetted",
            font=file_name,
            output=output_file,
            reduction=reduction,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.file_timings_ms.append(duration_ms)

    def log_file_error(
        self,
        file_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log font processing error."""
        self._logger.error(
            "Font processing failed",
            font=file_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((file_name, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
