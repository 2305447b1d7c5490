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
from typing import Protocol

from metadelta.context import GlobalConfig


class DiffLineSource(Protocol):
    """Produces the change diff of one file as a forward-only stream of lines."""

    # whether a "+"/"-" marker may follow leading whitespace
    indented_markers: bool

    def produce_diff_lines(self, path: str, config: GlobalConfig) -> AsyncIterator[str]:
        """
        Returns the diff lines of a file. Each line is either context or starts
        with a "+" or "-" marker followed by the original markup.

        The stream can only be consumed once; call again to diff the file anew.
        """
        ...
