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
from unittest.mock import Mock

from metadelta.context import GlobalConfig
from metadelta.core.diff_source.git_diff_source import GitDiffLineSource
from metadelta.core.git_commands.git_commands import GitCommands

RAW_DIFF = [
    "diff --git a/labels/CustomLabels.labels-meta.xml b/labels/CustomLabels.labels-meta.xml",
    "index 123..456 100644",
    "--- a/labels/CustomLabels.labels-meta.xml",
    "+++ b/labels/CustomLabels.labels-meta.xml",
    "@@ -1,5 +1,5 @@",
    " <labels>",
    "-    <fullName>Old</fullName>",
    "+    <fullName>New</fullName>",
    " </labels>",
    "@@ -20,2 +20,2 @@ <CustomLabels>",
    "-</CustomLabels>",
    "\\ No newline at end of file",
    "+</CustomLabels>",
]


def _stream(lines):
    async def produce():
        for line in lines:
            yield line

    return produce()


def _collect(source, path, config):
    async def run():
        return [line async for line in source.produce_diff_lines(path, config)]

    return asyncio.run(run())


def test_headers_are_not_yielded():
    git_commands = Mock(spec=GitCommands)
    git_commands.diff_lines.return_value = _stream(RAW_DIFF)

    lines = _collect(GitDiffLineSource(git_commands), "labels/a.xml", GlobalConfig())

    assert lines == [
        " <labels>",
        "-    <fullName>Old</fullName>",
        "+    <fullName>New</fullName>",
        " </labels>",
        "-</CustomLabels>",
        "+</CustomLabels>",
    ]


def test_config_is_forwarded_to_git():
    git_commands = Mock(spec=GitCommands)
    git_commands.diff_lines.return_value = _stream([])
    config = GlobalConfig(
        from_rev="main", to_rev="feature", diff_context_lines=10, ignore_whitespace=True
    )

    assert _collect(GitDiffLineSource(git_commands), "a.xml", config) == []
    git_commands.diff_lines.assert_called_once_with(
        "a.xml", "main", "feature", context_lines=10, ignore_whitespace=True
    )
