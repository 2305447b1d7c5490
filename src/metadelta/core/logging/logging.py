# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 metadelta
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, see <https://www.gnu.org/licenses/>.
#  */
# -----------------------------------------------------------------------------

"""
Logging configuration for the metadelta CLI application.

Console output goes through a rich console sink, while every run also
writes a detailed, rotated log file under the platform log directory.
"""

from datetime import datetime
from pathlib import Path

from loguru import logger
from rich.console import Console

from metadelta.constants import LOG_DIR


class StructuredLogger:
    """Structured logging helper for consistent log formatting."""

    def __init__(self, command_name: str, debug: bool = False, silent: bool = False):
        self.command_name = command_name
        self.debug = debug
        self.silent = silent
        self.console = Console()
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Set up loguru with proper formatting and sinks."""
        # Clear existing sinks to avoid duplicates
        logger.remove()

        console_level = "DEBUG" if self.debug else "INFO"

        LOG_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        logfile = LOG_DIR / f"metadelta_{timestamp}.log"

        # Console sink with Rich formatting
        def console_sink(message):
            text = message.record["message"].rstrip("\n")
            self.console.print(text)

        if not self.silent:
            logger.add(
                console_sink, level=console_level, format="{message}", catch=True
            )

        # File sink with detailed formatting
        logger.add(
            logfile,
            level="DEBUG",
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            rotation="10 MB",
            retention="14 days",
            compression="gz",
            catch=True,
            backtrace=True,
            diagnose=False,
        )

        logger.bind(command=self.command_name, logfile=str(logfile)).debug(
            "Logger initialized"
        )
        logger.debug(f"Log File Created At: {logfile}")

        self.logfile = logfile

    def get_logfile(self) -> Path:
        """Get the current log file path."""
        return self.logfile


def setup_logger(command_name: str, debug: bool = False, silent: bool = False) -> Path:
    """
    Set up logging for a command.

    Args:
        command_name: Name of the command being executed
        debug: Enable debug output on the console
        silent: Do not log to the console at all

    Returns:
        Path to the log file
    """
    structured_logger = StructuredLogger(command_name, debug=debug, silent=silent)
    return structured_logger.get_logfile()
