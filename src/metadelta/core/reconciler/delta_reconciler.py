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

from pathlib import PurePosixPath

from loguru import logger

from metadelta.core.data.models import ReconciliationResult, TypeMembers, add_member
from metadelta.core.logging.utils import log_type_members
from metadelta.core.registry.registry import MetadataRegistry


def clean_up_package_member(member: str) -> str:
    return member.replace("\\", "/")


def file_member_prefix(path: str) -> str:
    """Member prefix taken from the file name: Account.workflow-meta.xml gives "Account."."""
    return PurePosixPath(path.replace("\\", "/")).name.split(".")[0] + "."


class DeltaReconciler:
    """
    Turns the added/removed names of one file into package and destructive members.

    A name removed and added again under the same qualified type is a
    modification: it stays in the package and is not destroyed.
    """

    def __init__(self, registry: MetadataRegistry, path: str):
        self.registry = registry
        self.prefix = file_member_prefix(path)

    def qualify(self, qualified_type: str, full_name: str) -> str:
        if self.registry.is_standalone(qualified_type):
            member = full_name
        else:
            member = self.prefix + full_name
        return clean_up_package_member(member)

    def reconcile(self, added: TypeMembers, removed: TypeMembers) -> ReconciliationResult:
        result = ReconciliationResult()

        for qualified_type, names in removed.items():
            kept = added.get(qualified_type, set())
            for full_name in names - kept:
                add_member(
                    result.destructive_changes,
                    qualified_type,
                    self.qualify(qualified_type, full_name),
                )

        for qualified_type, names in added.items():
            for full_name in names:
                add_member(
                    result.package, qualified_type, self.qualify(qualified_type, full_name)
                )

        log_type_members("destructive changes", result.destructive_changes)
        log_type_members("package", result.package)
        if result.is_empty():
            logger.debug("No entity level change detected")
        return result
