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

from metadelta.core.exceptions import FileSystemError


class OutputFileWriter:
    """Writes rewritten files under the output directory, keeping their relative path."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir

    async def write(self, path: str, content: str) -> None:
        await asyncio.to_thread(self._write, path, content)

    def _write(self, path: str, content: str) -> None:
        target = self.output_dir / path.replace("\\", "/")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Cannot write {target}", str(e)) from e
        logger.debug(f"Wrote {target}")
