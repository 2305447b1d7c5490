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

from typing import Protocol


class FileReader(Protocol):
    """An interface for reading the post-change content of a file."""

    async def read(self, path: str) -> str:
        """
        Reads the content of a file as it is after the change.

        Args:
            path: The repository relative path of the file.

        Raises:
            FileSystemError: when the content cannot be read.
        """
        ...


class FileWriter(Protocol):
    """An interface for persisting rewritten files."""

    async def write(self, path: str, content: str) -> None:
        """
        Writes the whole content of a file, replacing any previous version.

        Raises:
            FileSystemError: when the content cannot be written.
        """
        ...
