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

from dataclasses import dataclass, field

# qualified type -> names
TypeMembers = dict[str, set[str]]


@dataclass(frozen=True)
class EntityKey:
    # "<directory label>.<xml tag>", e.g. "workflows.alerts"
    qualified_type: str
    full_name: str


@dataclass
class ClassifierState:
    """
    Accumulator threaded through the diff line classifier.

    potential_tag is the last entity tag opened. qualified_type and
    full_name describe the entity whose fullName line has been seen since
    that tag opened; both are cleared once the entity has been recorded.
    """

    potential_tag: str | None = None
    qualified_type: str | None = None
    full_name: str | None = None
    added: TypeMembers = field(default_factory=dict)
    removed: TypeMembers = field(default_factory=dict)

    @property
    def current_key(self) -> EntityKey | None:
        if self.qualified_type is None or self.full_name is None:
            return None
        return EntityKey(self.qualified_type, self.full_name)

    def record(self, members: TypeMembers, key: EntityKey) -> None:
        members.setdefault(key.qualified_type, set()).add(key.full_name)
        self.qualified_type = None
        self.full_name = None


@dataclass
class ReconciliationResult:
    destructive_changes: TypeMembers = field(default_factory=dict)
    package: TypeMembers = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.destructive_changes and not self.package


def add_member(members: TypeMembers, metadata_type: str, member: str) -> None:
    members.setdefault(metadata_type, set()).add(member)


@dataclass
class DeltaManifest:
    """Long-lived package/destructive manifest aggregated across files."""

    package: TypeMembers = field(default_factory=dict)
    destructive_changes: TypeMembers = field(default_factory=dict)

    def merge(self, result: ReconciliationResult) -> None:
        for metadata_type, members in result.package.items():
            self.package.setdefault(metadata_type, set()).update(members)
        for metadata_type, members in result.destructive_changes.items():
            self.destructive_changes.setdefault(metadata_type, set()).update(members)
