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
Rewrites a multi-entity metadata file so it only keeps the entities that
were added or modified by the change.

The file is parsed into a mapping tree with xmltodict. Every entity
collection under the root container is forced to a list while parsing,
so filtering never has to care whether the source held one element or
many.
"""

import re
from dataclasses import dataclass
from xml.parsers.expat import ExpatError

import xmltodict
from loguru import logger

from metadelta.constants import FULLNAME
from metadelta.core.data.models import TypeMembers
from metadelta.core.exceptions import unparsable_content
from metadelta.core.registry.registry import MetadataRegistry

INDENT = "    "
XML_DECLARATION = re.compile(r"^(\s*<\?xml[^>]*\?>)\s*")


@dataclass
class ParsedFileContent:
    tree: dict
    authorized_keys: list[str]
    # the source started with an XML declaration
    has_declaration: bool = True

    @property
    def root_tag(self) -> str:
        return next(iter(self.tree))

    @property
    def content(self) -> dict:
        return self.tree[self.root_tag]


def normalize_declaration(xml_text: str) -> str:
    """Puts the first element on its own line after the XML declaration."""
    return XML_DECLARATION.sub(lambda m: m.group(1).lstrip() + "\n", xml_text, count=1)


class ContentRebuilder:
    def __init__(self, registry: MetadataRegistry):
        self.registry = registry

    def _force_entity_list(self, path, key, value) -> bool:
        # path holds the ancestors of key: only direct children of the root
        return len(path) == 1 and self.registry.is_entity_tag(key)

    def parse(self, text: str, path: str = "<content>") -> ParsedFileContent:
        try:
            tree = xmltodict.parse(
                text,
                xml_attribs=True,
                strip_whitespace=True,
                force_list=self._force_entity_list,
            )
        except ExpatError as e:
            raise unparsable_content(path, str(e)) from e

        if not isinstance(tree, dict) or len(tree) != 1:
            raise unparsable_content(path, "expected a single root element")

        root_tag = next(iter(tree))
        if tree[root_tag] is None:
            tree[root_tag] = {}

        content = tree[root_tag]
        if isinstance(content, dict):
            authorized_keys = [
                key for key in content if self.registry.is_entity_tag(key)
            ]
        else:
            authorized_keys = []

        has_declaration = XML_DECLARATION.match(text) is not None
        return ParsedFileContent(tree, authorized_keys, has_declaration)

    def filter(self, parsed: ParsedFileContent, additions: TypeMembers) -> ParsedFileContent:
        """
        Keeps, under every entity collection, only the elements whose fullName
        is in the addition set of that collection's qualified type.
        """
        content = parsed.content
        for key in parsed.authorized_keys:
            descriptor = self.registry.resolve_by_xml_tag(key)
            names = additions.get(descriptor.directory_label, set())
            elements = content.get(key) or []
            kept = [
                element
                for element in elements
                if isinstance(element, dict) and element.get(FULLNAME) in names
            ]
            logger.debug(f"{descriptor.directory_label}: kept {len(kept)}/{len(elements)}")
            content[key] = kept
        return parsed

    def serialize(self, parsed: ParsedFileContent) -> str:
        xml_text = xmltodict.unparse(
            parsed.tree,
            full_document=parsed.has_declaration,
            encoding="UTF-8",
            pretty=True,
            indent=INDENT,
        )
        return normalize_declaration(xml_text)

    def rebuild(self, text: str, additions: TypeMembers, path: str = "<content>") -> str:
        parsed = self.parse(text, path)
        return self.serialize(self.filter(parsed, additions))
