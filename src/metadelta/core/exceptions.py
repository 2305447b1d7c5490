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
Custom exception hierarchy for the metadelta CLI application.

Errors raised while reading, parsing or writing a single file surface
to the file-level handler; the CLI converts them into a clean exit code.
"""

import contextlib

import typer
from loguru import logger
from pydantic import ValidationError as PydanticValidationError


class metadeltaError(Exception):
    """
    Base exception for all metadelta-related errors.

    All metadelta-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a metadeltaError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class GitError(metadeltaError):
    """
    Errors related to git operations.

    Raised when git commands fail or when git repository
    state is invalid for the requested operation.
    """

    pass


class ValidationError(metadeltaError):
    """
    Input validation errors.

    Raised when user input fails validation checks,
    such as invalid file paths or unknown change types.
    """

    pass


class ConfigurationError(metadeltaError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class FileSystemError(metadeltaError):
    """
    File system operation errors.

    Raised when the post-change content of a file cannot be read
    or when the rewritten delta file cannot be written.
    """

    pass


class RegistryError(metadeltaError):
    """Raised when the metadata type registry is inconsistent or a type is unknown."""

    pass


class DeltaRewriteError(metadeltaError):
    """
    Errors during the delta rewrite of a multi-entity file.

    Raised when the post-change content is not well-formed markup
    or does not have a single root container.
    """

    pass


# Convenience functions for creating common errors
def git_not_found() -> GitError:
    """Create a GitError for when git is not available."""
    return GitError(
        "Git is not installed or not in PATH",
        "Please install git and ensure it's available in your PATH environment variable",
    )


def not_git_repository(path: str = ".") -> GitError:
    """Create a GitError for when not in a git repository."""
    return GitError(
        f"Not a git repository: {path}",
        "Run 'git init' to initialize a git repository or navigate to an existing repository",
    )


def path_not_found(path: str) -> FileSystemError:
    """Create a FileSystemError for content that could not be read."""
    return FileSystemError(
        f"Path not found: {path}",
        "Please check that the path exists at the target revision",
    )


def unknown_metadata_type(metadata_type: str) -> RegistryError:
    return RegistryError(
        f"Unknown metadata type: {metadata_type}",
        "Check the metadata_registry setting or use the default registry",
    )


def unparsable_content(path: str, reason: str) -> DeltaRewriteError:
    return DeltaRewriteError(f"Could not parse content of {path}", reason)


@contextlib.contextmanager
def handle_metadelta_exception(exit_on_fail: bool = True):
    """
    Report errors raised inside the block and convert them to a failing exit.

    metadeltaError and pydantic validation errors are expected failures and are
    logged without a traceback. Anything else is logged with its traceback.
    When exit_on_fail is False unexpected errors are re-raised after logging.
    """
    try:
        yield
    except typer.Exit:
        raise
    except metadeltaError as e:
        logger.error(f"[red]Error:[/red] {e.message}")
        if e.details:
            logger.debug(f"Details: {e.details}")
        raise typer.Exit(1)
    except PydanticValidationError as e:
        logger.error(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)
    except Exception:
        logger.exception("Unexpected error")
        if exit_on_fail:
            raise typer.Exit(1)
        raise
