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

from unittest.mock import Mock

import pytest

from metadelta.core.git_commands.git_commands import GitCommands
from metadelta.core.git_interface.interface import GitInterface

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def mock_git():
    return Mock(spec=GitInterface)


@pytest.fixture
def git_commands(mock_git):
    return GitCommands(mock_git)


# -----------------------------------------------------------------------------
# Diff Tests
# -----------------------------------------------------------------------------


def test_diff_lines_arguments(git_commands, mock_git):
    git_commands.diff_lines("labels\\CustomLabels.labels-meta.xml", "HEAD~1", "HEAD")

    mock_git.stream_git_lines.assert_called_once_with(
        [
            "diff",
            "--no-color",
            "--no-ext-diff",
            "--unified=200",
            "HEAD~1",
            "HEAD",
            "--",
            "labels/CustomLabels.labels-meta.xml",
        ]
    )


def test_diff_lines_against_working_tree_ignoring_whitespace(git_commands, mock_git):
    git_commands.diff_lines(
        "a.xml", "main", None, context_lines=5, ignore_whitespace=True
    )

    mock_git.stream_git_lines.assert_called_once_with(
        [
            "diff",
            "--no-color",
            "--no-ext-diff",
            "--unified=5",
            "--ignore-all-space",
            "--ignore-blank-lines",
            "--ignore-cr-at-eol",
            "main",
            "--",
            "a.xml",
        ]
    )


# -----------------------------------------------------------------------------
# Name Status Tests
# -----------------------------------------------------------------------------


def test_name_status_parsing(git_commands, mock_git):
    mock_git.run_git_text_out.return_value = (
        "M\tforce-app/labels/CustomLabels.labels-meta.xml\n"
        "A\tforce-app/workflows/Account.workflow-meta.xml\n"
        "D\tforce-app/workflows/Lead.workflow-meta.xml\n"
        "garbage line\n"
    )

    changes = git_commands.name_status("HEAD~1", "HEAD", ["force-app"])

    assert changes == [
        ("M", "force-app/labels/CustomLabels.labels-meta.xml"),
        ("A", "force-app/workflows/Account.workflow-meta.xml"),
        ("D", "force-app/workflows/Lead.workflow-meta.xml"),
    ]
    mock_git.run_git_text_out.assert_called_once_with(
        ["diff", "--name-status", "--no-renames", "HEAD~1", "HEAD", "--", "force-app"]
    )


def test_name_status_returns_empty_on_failure(git_commands, mock_git):
    mock_git.run_git_text_out.return_value = None

    assert git_commands.name_status("HEAD~1") == []


# -----------------------------------------------------------------------------
# Misc Tests
# -----------------------------------------------------------------------------


def test_cat_file(git_commands, mock_git):
    mock_git.run_git_text_out.return_value = "content"

    assert git_commands.cat_file("HEAD", "path\\to\\file.xml") == "content"
    mock_git.run_git_text_out.assert_called_once_with(
        ["cat-file", "-p", "HEAD:path/to/file.xml"]
    )


def test_is_git_repo(git_commands, mock_git):
    mock_git.run_git_text_out.return_value = "true\n"
    assert git_commands.is_git_repo()

    mock_git.run_git_text_out.return_value = None
    assert not git_commands.is_git_repo()
