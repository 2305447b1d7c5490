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

from collections.abc import Iterable
from pathlib import PurePosixPath
from types import MappingProxyType

import tomllib
from loguru import logger
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from metadelta.core.exceptions import (
    ConfigurationError,
    RegistryError,
    unknown_metadata_type,
)
from metadelta.core.registry.default_types import DEFAULT_METADATA
from metadelta.core.registry.models import MetadataDescriptor

_DESCRIPTORS_ADAPTER = TypeAdapter(list[MetadataDescriptor])


class MetadataRegistry:
    """
    Read-only index over the metadata descriptors.

    Every lookup table is built once, when the registry is constructed,
    and is immutable afterwards so one registry can serve any number of
    concurrently processed files.
    """

    def __init__(self, descriptors: Iterable[MetadataDescriptor]):
        by_type: dict[str, MetadataDescriptor] = {}
        by_xml_tag: dict[str, MetadataDescriptor] = {}
        by_directory: dict[str, MetadataDescriptor] = {}

        for descriptor in descriptors:
            if descriptor.type in by_type:
                raise RegistryError(f"Duplicate metadata type: {descriptor.type}")
            by_type[descriptor.type] = descriptor

            if descriptor.xml_tag is not None:
                if descriptor.xml_tag in by_xml_tag:
                    raise RegistryError(
                        f"Duplicate xml tag: {descriptor.xml_tag}",
                        f"Declared by {by_xml_tag[descriptor.xml_tag].type} and {descriptor.type}",
                    )
                by_xml_tag[descriptor.xml_tag] = descriptor

            by_directory.setdefault(descriptor.directory_label, descriptor)

        for descriptor in by_type.values():
            if descriptor.parent_type is not None and descriptor.parent_type not in by_type:
                raise RegistryError(
                    f"{descriptor.type} references unknown parent {descriptor.parent_type}"
                )

        self._by_type = MappingProxyType(by_type)
        self._by_xml_tag = MappingProxyType(by_xml_tag)
        self._by_directory = MappingProxyType(by_directory)
        self._standalone_types = frozenset(
            d.directory_label for d in by_type.values() if d.standalone
        )
        self._parent_types = frozenset(
            d.parent_type for d in by_type.values() if d.parent_type is not None
        )

    @classmethod
    def default(cls) -> "MetadataRegistry":
        return cls(DEFAULT_METADATA)

    @classmethod
    def load_toml(cls, path) -> "MetadataRegistry":
        """
        Loads a registry from a TOML file made of ``[[types]]`` tables whose keys
        are the MetadataDescriptor fields.
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read metadata registry {path}", str(e))
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid metadata registry {path}", str(e))

        try:
            descriptors = _DESCRIPTORS_ADAPTER.validate_python(data.get("types", []))
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid metadata registry {path}", str(e))

        logger.debug(f"Loaded {len(descriptors)} metadata types from {path}")
        return cls(descriptors)

    @property
    def xml_tags(self) -> frozenset[str]:
        return frozenset(self._by_xml_tag)

    def resolve_by_xml_tag(self, tag: str) -> MetadataDescriptor | None:
        return self._by_xml_tag.get(tag)

    def resolve_by_type(self, metadata_type: str) -> MetadataDescriptor:
        try:
            return self._by_type[metadata_type]
        except KeyError:
            raise unknown_metadata_type(metadata_type) from None

    def resolve_by_directory(self, directory_label: str) -> MetadataDescriptor | None:
        return self._by_directory.get(directory_label)

    def is_entity_tag(self, tag: str) -> bool:
        return tag in self._by_xml_tag

    def is_standalone(self, qualified_type: str) -> bool:
        return qualified_type in self._standalone_types

    def children_of(self, metadata_type: str) -> list[MetadataDescriptor]:
        return [d for d in self._by_type.values() if d.parent_type == metadata_type]

    def in_file_parents(self) -> list[MetadataDescriptor]:
        return [self._by_type[t] for t in sorted(self._parent_types)]

    def resolve_for_path(self, path: str) -> MetadataDescriptor | None:
        """
        Finds the in-file family a repository path belongs to, using the
        directory names of the path (closest directory first). When the
        family declares a suffix the file name must carry it, so other files
        stored in a family directory are not mistaken for metadata.
        """
        file_path = PurePosixPath(path.replace("\\", "/"))
        for directory in reversed(file_path.parts[:-1]):
            descriptor = self.resolve_by_directory(directory)
            if descriptor is None or descriptor.type not in self._parent_types:
                continue
            if descriptor.suffix is None or has_suffix(file_path.name, descriptor.suffix):
                return descriptor
            return None
        return None


def has_suffix(file_name: str, suffix: str) -> bool:
    """Account.workflow-meta.xml and Account.workflow both carry the "workflow" suffix."""
    return file_name.endswith(f".{suffix}-meta.xml") or file_name.endswith(f".{suffix}")
