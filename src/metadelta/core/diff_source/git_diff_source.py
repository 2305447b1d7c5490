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

from collections.abc import AsyncIterator

from metadelta.constants import HUNK_HEADER
from metadelta.context import GlobalConfig
from metadelta.core.git_commands.git_commands import GitCommands


class GitDiffLineSource:
    """Diff lines of one file taken from `git diff`, without the file and hunk headers."""

    # git writes the marker in the first column of every changed line
    indented_markers = False

    def __init__(self, git_commands: GitCommands):
        self.git_commands = git_commands

    async def produce_diff_lines(
        self, path: str, config: GlobalConfig
    ) -> AsyncIterator[str]:
        in_hunk = False
        async for line in self.git_commands.diff_lines(
            path,
            config.from_rev,
            config.to_rev,
            context_lines=config.diff_context_lines,
            ignore_whitespace=config.ignore_whitespace,
        ):
            if line.startswith(HUNK_HEADER):
                in_hunk = True
                continue
            # "\ No newline at end of file" is git meta output
            if in_hunk and not line.startswith("\\"):
                yield line
