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

from dataclasses import dataclass


@dataclass(frozen=True)
class MetadataDescriptor:
    """
    Structural description of one metadata kind.

    Children of an in-file family carry the xml_tag that opens one entity
    inside the parent file, and a directory_label equal to the qualified
    type ``<parent directory_label>.<xml_tag>``.
    """

    type: str
    directory_label: str
    xml_tag: str | None = None
    parent_type: str | None = None
    suffix: str | None = None
    # entities that are unique across files are not prefixed by the file name
    standalone: bool = False
