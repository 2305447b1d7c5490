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

import asyncio
from pathlib import Path

from loguru import logger

from metadelta.core.exceptions import FileSystemError, path_not_found
from metadelta.core.git_commands.git_commands import GitCommands


class GitFileReader:
    def __init__(self, git_commands: GitCommands, repo_path: Path, to_rev: str | None):
        self.git_commands = git_commands
        self.repo_path = repo_path
        self.to_rev = to_rev

    async def read(self, path: str) -> str:
        """
        Returns the file content at to_rev using git cat-file, or the working
        tree content when no target revision is set.
        """
        if self.to_rev is None:
            return await asyncio.to_thread(self._read_working_tree, path)

        content = await asyncio.to_thread(self.git_commands.cat_file, self.to_rev, path)
        if content is None:
            raise path_not_found(f"{self.to_rev}:{path}")
        return content

    def _read_working_tree(self, path: str) -> str:
        file_path = self.repo_path / path
        logger.debug(f"Reading {file_path}")
        try:
            return file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise path_not_found(str(file_path)) from None
        except OSError as e:
            raise FileSystemError(f"Cannot read {file_path}", str(e)) from e
