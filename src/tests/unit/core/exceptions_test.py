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

import pytest
import typer

from metadelta.core.exceptions import (
    ConfigurationError,
    DeltaRewriteError,
    FileSystemError,
    GitError,
    RegistryError,
    ValidationError,
    git_not_found,
    handle_metadelta_exception,
    metadeltaError,
    not_git_repository,
    path_not_found,
    unknown_metadata_type,
    unparsable_content,
)


def test_exception_inheritance():
    assert issubclass(GitError, metadeltaError)
    assert issubclass(ValidationError, metadeltaError)
    assert issubclass(ConfigurationError, metadeltaError)
    assert issubclass(FileSystemError, metadeltaError)
    assert issubclass(RegistryError, metadeltaError)
    assert issubclass(DeltaRewriteError, metadeltaError)


def test_git_not_found():
    exc = git_not_found()
    assert isinstance(exc, GitError)
    assert "Git is not installed" in exc.message
    assert "Please install git" in exc.details


def test_not_git_repository():
    exc = not_git_repository("/some/path")
    assert isinstance(exc, GitError)
    assert "Not a git repository: /some/path" in exc.message
    assert "Run 'git init'" in exc.details


def test_path_not_found():
    exc = path_not_found("HEAD:missing.xml")
    assert isinstance(exc, FileSystemError)
    assert "Path not found: HEAD:missing.xml" in exc.message


def test_unknown_metadata_type():
    exc = unknown_metadata_type("Nope")
    assert isinstance(exc, RegistryError)
    assert "Unknown metadata type: Nope" in exc.message


def test_unparsable_content():
    exc = unparsable_content("a.xml", "mismatched tag")
    assert isinstance(exc, DeltaRewriteError)
    assert "a.xml" in exc.message
    assert exc.details == "mismatched tag"


def test_handler_converts_known_errors_to_exit():
    with pytest.raises(typer.Exit) as exc_info:
        with handle_metadelta_exception():
            raise GitError("boom")

    assert exc_info.value.exit_code == 1


def test_handler_reraises_unexpected_errors_when_not_exiting():
    with pytest.raises(KeyError):
        with handle_metadelta_exception(exit_on_fail=False):
            raise KeyError("unexpected")


def test_handler_lets_exit_through():
    with pytest.raises(typer.Exit) as exc_info:
        with handle_metadelta_exception():
            raise typer.Exit(0)

    assert exc_info.value.exit_code == 0
