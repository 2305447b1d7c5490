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

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from subprocess import CompletedProcess


class GitInterface(ABC):
    """
    Abstract interface for running git commands.
    This abstracts away the details of how git commands are executed.
    """

    @abstractmethod
    def run_git_text_out(self, args: list[str]) -> str | None:
        """Run a git command and return its stdout. Returns None on error."""

    @abstractmethod
    def run_git_text(self, args: list[str]) -> CompletedProcess[str] | None:
        """Run a git command with text response output. Returns None on error."""

    @abstractmethod
    def stream_git_lines(self, args: list[str]) -> AsyncIterator[str]:
        """
        Run a git command and yield its stdout line by line, without line endings.
        Raises GitError once the stream is exhausted if git exited with an error.
        """
