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

import re
from collections.abc import AsyncIterator

from loguru import logger

from metadelta.core.git_interface.interface import GitInterface

WHITESPACE_FLAGS = ["--ignore-all-space", "--ignore-blank-lines", "--ignore-cr-at-eol"]


class GitCommands:
    _NAME_STATUS_RE = re.compile(r"^([ACDMRTUXB])\d*\t(.+)$")

    def __init__(self, git: GitInterface):
        self.git = git

    def is_git_repo(self) -> bool:
        out = self.git.run_git_text_out(["rev-parse", "--is-inside-work-tree"])
        return out is not None and out.strip() == "true"

    def _revision_args(self, from_rev: str, to_rev: str | None) -> list[str]:
        return [from_rev] if to_rev is None else [from_rev, to_rev]

    def diff_lines(
        self,
        path: str,
        from_rev: str,
        to_rev: str | None = None,
        context_lines: int = 200,
        ignore_whitespace: bool = False,
    ) -> AsyncIterator[str]:
        """
        Streams the raw unified diff of a single file between two revisions.
        When to_rev is None the working tree is compared against from_rev.
        """
        args = ["diff", "--no-color", "--no-ext-diff", f"--unified={context_lines}"]
        if ignore_whitespace:
            args += WHITESPACE_FLAGS
        args += self._revision_args(from_rev, to_rev)
        args += ["--", self._git_path(path)]
        return self.git.stream_git_lines(args)

    def name_status(
        self, from_rev: str, to_rev: str | None = None, paths: list[str] | None = None
    ) -> list[tuple[str, str]]:
        """
        Returns (status letter, path) for every file changed between the revisions.
        Renames and copies report the new path. Rename detection is disabled so a
        renamed file shows up as a deletion and an addition.
        """
        args = ["diff", "--name-status", "--no-renames"]
        args += self._revision_args(from_rev, to_rev)
        if paths:
            args += ["--"] + [self._git_path(p) for p in paths]

        out = self.git.run_git_text_out(args)
        if out is None:
            return []

        changes = []
        for line in out.splitlines():
            match = self._NAME_STATUS_RE.match(line)
            if not match:
                logger.debug(f"Skipping unexpected name-status line: {line!r}")
                continue
            changes.append((match.group(1), match.group(2).split("\t")[-1]))
        return changes

    def cat_file(self, rev: str, path: str) -> str | None:
        return self.git.run_git_text_out(["cat-file", "-p", f"{rev}:{self._git_path(path)}"])

    @staticmethod
    def _git_path(path: str) -> str:
        # git expects posix separators
        return path.replace("\\", "/").strip()
