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
import subprocess
from collections.abc import AsyncIterator
from pathlib import Path

from loguru import logger

from metadelta.core.exceptions import GitError, git_not_found

from .interface import GitInterface


class SubprocessGitInterface(GitInterface):
    def __init__(self, repo_path: str | Path | None = None) -> None:
        # Ensure repo_path is a Path object for consistency
        if isinstance(repo_path, Path):
            self.repo_path = repo_path
        else:
            self.repo_path = Path(repo_path or ".")

    def run_git_text_out(self, args: list[str]) -> str | None:
        result = self.run_git_text(args)
        return result.stdout if result else None

    def run_git_text(self, args: list[str]) -> subprocess.CompletedProcess[str] | None:
        try:
            cwd = str(self.repo_path)
            cmd = ["git"] + args
            logger.debug(
                f"Running git text command: {' '.join(cmd)} cwd={cwd}"
            )
            result = subprocess.run(
                cmd,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=True,
                cwd=cwd,
            )
            if result.stdout:
                logger.debug(
                    f"git stdout (text): {result.stdout[:2000]}"
                    + ("...(truncated)" if len(result.stdout) > 2000 else "")
                )

            if result.stderr:
                logger.debug(
                    f"git stderr (text): {result.stderr[:2000]}"
                    + ("...(truncated)" if len(result.stderr) > 2000 else "")
                )
            logger.debug(f"git returncode: {result.returncode}")
            return result
        except FileNotFoundError:
            raise git_not_found()
        except subprocess.CalledProcessError as e:
            logger.warning(
                f"Git text command failed: {' '.join(e.cmd)} code={e.returncode} stderr={e.stderr}"
            )
            return None

    async def stream_git_lines(self, args: list[str]) -> AsyncIterator[str]:
        cwd = str(self.repo_path)
        cmd = ["git"] + args
        logger.debug(f"Streaming git command: {' '.join(cmd)} cwd={cwd}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
            )
        except FileNotFoundError:
            raise git_not_found()

        drained = False
        try:
            async for raw_line in process.stdout:
                yield raw_line.decode("utf-8", errors="replace").rstrip("\r\n")
            drained = True
        finally:
            if not drained and process.returncode is None:
                # consumer stopped reading early
                process.kill()
            stderr = await process.stderr.read()
            returncode = await process.wait()

        if returncode != 0:
            raise GitError(
                f"Git command failed: {' '.join(cmd)}",
                f"code={returncode} stderr={stderr.decode('utf-8', errors='replace')}",
            )
        logger.debug(f"git returncode: {returncode}")
