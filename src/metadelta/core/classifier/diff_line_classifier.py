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

"""
Classification of the lines of a single file diff into added and removed
entities of a multi-entity metadata file.

The classifier is a left fold over the diff lines: each line updates a
ClassifierState and, once both the entity tag and its fullName are known,
the first changed line of that entity records it as added or removed.
"""

import re
from collections.abc import AsyncIterable, Iterable
from functools import reduce
from xml.sax.saxutils import unescape

from loguru import logger

from metadelta.constants import FULLNAME, MINUS, PLUS
from metadelta.core.data.models import ClassifierState
from metadelta.core.registry.registry import MetadataRegistry

FULLNAME_XML_TAG = re.compile(rf"<{FULLNAME}>(.*)</{FULLNAME}>")
FULLNAME_OPEN_TAG = f"<{FULLNAME}>"
# a bare opening tag alone on its line, optionally behind a diff marker
XML_TAG = re.compile(r"^\s*[-+]?\s*<([A-Za-z_][\w\-]*)>\s*$")

_ENTITIES = {"&quot;": '"', "&apos;": "'"}


def line_marker(line: str, indented: bool = True) -> str | None:
    """
    Returns the diff marker of a line. With indented, whitespace before the
    marker is ignored; otherwise only the first column holds a marker.
    """
    head = line.lstrip() if indented else line
    if head.startswith(PLUS):
        return PLUS
    if head.startswith(MINUS):
        return MINUS
    return None


class DiffLineClassifier:
    def __init__(
        self,
        registry: MetadataRegistry,
        directory_label: str,
        indented_markers: bool = True,
    ):
        """
        Args:
            registry: registry used to recognise entity tags
            directory_label: directory label of the file being diffed, used
                to build qualified types such as "workflows.alerts"
            indented_markers: whether a diff marker may follow leading
                whitespace; git puts it in the first column only
        """
        self.registry = registry
        self.directory_label = directory_label
        self.indented_markers = indented_markers

    def step(self, state: ClassifierState, line: str) -> ClassifierState:
        self._detect(state, line)

        key = state.current_key
        if key is None:
            return state

        marker = line_marker(line, self.indented_markers)
        if marker == MINUS and FULLNAME_OPEN_TAG in line:
            logger.debug(f"Removed {key.qualified_type} {key.full_name}")
            state.record(state.removed, key)
        elif marker is not None:
            logger.debug(f"Added {key.qualified_type} {key.full_name}")
            state.record(state.added, key)

        return state

    def _detect(self, state: ClassifierState, line: str) -> None:
        fullname_match = FULLNAME_XML_TAG.search(line)
        if fullname_match and state.potential_tag is not None:
            state.full_name = unescape(fullname_match.group(1), _ENTITIES)
            state.qualified_type = f"{self.directory_label}.{state.potential_tag}"

        tag_match = XML_TAG.match(line)
        if tag_match and self.registry.is_entity_tag(tag_match.group(1)):
            # a new entity starts, any name seen so far belonged to the previous one
            state.potential_tag = tag_match.group(1)
            state.qualified_type = None
            state.full_name = None

    def classify(self, lines: Iterable[str]) -> ClassifierState:
        return reduce(self.step, lines, ClassifierState())

    async def aclassify(self, lines: AsyncIterable[str]) -> ClassifierState:
        state = ClassifierState()
        async for line in lines:
            state = self.step(state, line)
        return state
