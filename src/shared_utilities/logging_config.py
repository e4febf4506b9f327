"""
Centralized logging configuration for repo-rev-checker.

All diagnostics go to stderr so that stdout stays reserved for the JSON
report consumed by release tooling.
"""

import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class LoggingManager:
    """Manages logging configuration across the checker."""

    def __init__(self, service_name: str = "repo-rev-checker"):
        """
        Initialize logging manager.

        Args:
            service_name: Name of the service for logging identification
        """
        self.service_name = service_name
        self._configured = False

    def configure_logging(
        self,
        level: str = "INFO",
        enable_file_logging: bool = False,
        log_file_path: Path | None = None,
        structured_format: bool = False,
        force: bool = False,
    ) -> None:
        """
        Configure logging for the entire application.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            enable_file_logging: Whether to enable file logging
            log_file_path: Path for log file (auto-generated if None)
            structured_format: Whether to append bound context to console lines
            force: Reconfigure even if logging was configured before
        """
        if self._configured and not force:
            return

        # Remove default loguru handler
        logger.remove()

        logger.add(
            sys.stderr,
            format=self._get_console_format(structured_format),
            level=level,
            colorize=None,
            backtrace=False,
            diagnose=False,
        )

        if enable_file_logging:
            if log_file_path is None:
                log_file_path = Path.cwd() / "logs" / f"{self.service_name}.log"

            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                str(log_file_path),
                format=self._get_file_format(),
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="gz",
                backtrace=True,
                diagnose=False,
                serialize=True,
            )

        logger.configure(extra={"service_name": self.service_name})

        self._configured = True
        logger.debug(
            f"Logging configured for {self.service_name} "
            f"(level={level}, file_logging={enable_file_logging})"
        )

    def _get_console_format(self, structured: bool) -> str:
        """Get console logging format."""
        if structured:
            return (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
                "<level>{message}</level> | "
                "{extra}"
            )
        return (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        )

    def _get_file_format(self) -> str:
        # JSON lines are produced by serialize=True
        return "{time} | {level} | {name}:{function}:{line} | {message} | {extra}"

    def get_logger(self, name: str) -> Any:
        """
        Get a logger instance with the given name.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Configured logger instance
        """
        return logger.bind(component=name)


# Global logging manager instance
_logging_manager: LoggingManager | None = None


def get_logging_manager() -> LoggingManager:
    """Get or create the global logging manager instance."""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def configure_logging(
    level: str | None = None,
    structured: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure application logging with environment-driven defaults.

    Args:
        level: Logging level, defaults to LOG_LEVEL or INFO
        structured: Append bound context to console lines, defaults to
            LOG_STRUCTURED
        enable_file_logging: Enable file logging, defaults to ENABLE_FILE_LOGGING
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    if structured is None:
        structured = os.getenv("LOG_STRUCTURED", "false").lower() == "true"

    if enable_file_logging is None:
        enable_file_logging = (
            os.getenv("ENABLE_FILE_LOGGING", "false").lower() == "true"
        )

    manager = get_logging_manager()
    manager.configure_logging(
        level=level,
        structured_format=structured,
        enable_file_logging=enable_file_logging,
        force=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given component.

    Args:
        name: Component name (usually __name__)

    Returns:
        Configured logger instance
    """
    manager = get_logging_manager()
    return manager.get_logger(name)
