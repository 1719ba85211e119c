"""
Logging configuration using loguru.

Calculator modules log through ``loguru.logger`` directly: DEBUG for run
summaries, WARNING for degraded runs (ceiling hit, stalled card payment,
index feed fallback). Nothing is shown until setup_logging() adds sinks.
"""

import sys

from loguru import logger

# Only records emitted from inside the package reach our sinks.
PACKAGE = "ratesense"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru's sinks with a stderr sink and an optional file sink.

    Args:
        level: Minimum log level name, any case (e.g. "debug", "WARNING").
        log_file: Path to a log file. If None, only logs to stderr.
        fmt: Loguru format string for stderr.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt, filter=PACKAGE)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function} | {message}",
            filter=PACKAGE,
            rotation=rotation,
            retention=retention,
        )
    logger.debug(f"Logging at {level}" + (f", file {log_file}" if log_file else ""))
