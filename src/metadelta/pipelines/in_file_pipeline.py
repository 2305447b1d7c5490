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

from metadelta.constants import ADDITION, DELETION, LABEL_EXTENSION, MODIFICATION
from metadelta.context import GlobalConfig
from metadelta.core.classifier.diff_line_classifier import DiffLineClassifier
from metadelta.core.data.models import (
    ReconciliationResult,
    TypeMembers,
    add_member,
)
from metadelta.core.diff_source.protocol import DiffLineSource
from metadelta.core.exceptions import ValidationError
from metadelta.core.file_reader.protocol import FileReader, FileWriter
from metadelta.core.logging.utils import time_block
from metadelta.core.rebuilder.content_rebuilder import ContentRebuilder
from metadelta.core.reconciler.delta_reconciler import (
    DeltaReconciler,
    clean_up_package_member,
)
from metadelta.core.registry.models import MetadataDescriptor
from metadelta.core.registry.registry import MetadataRegistry


class InFileDeltaPipeline:
    """
    Computes the delta of one multi-entity file.

    Each instance owns the state of a single file run, so several files can
    be processed concurrently with one pipeline per file.
    """

    def __init__(
        self,
        path: str,
        file_type: MetadataDescriptor,
        registry: MetadataRegistry,
        config: GlobalConfig,
        diff_source: DiffLineSource,
        file_reader: FileReader,
        file_writer: FileWriter,
    ):
        self.path = path
        self.file_type = file_type
        self.registry = registry
        self.config = config
        self.diff_source = diff_source
        self.file_reader = file_reader
        self.file_writer = file_writer

        self.classifier = DiffLineClassifier(
            registry, file_type.directory_label, diff_source.indented_markers
        )
        self.reconciler = DeltaReconciler(registry, path)
        self.rebuilder = ContentRebuilder(registry)

    async def handle(self, change_type: str) -> ReconciliationResult:
        logger.debug(f"Handling {change_type} {self.path} ({self.file_type.type})")
        if change_type == ADDITION:
            return await self.handle_addition()
        if change_type == MODIFICATION:
            return await self.handle_modification()
        if change_type == DELETION:
            return await self.handle_deletion()
        raise ValidationError(
            f"Unsupported change type {change_type!r} for {self.path}",
            "Only additions, modifications and deletions are handled",
        )

    async def handle_addition(self) -> ReconciliationResult:
        added, result = await self._handle_in_diff()
        self._fill_file_member(result.package)
        if self.config.generate_delta:
            await self._write_delta(added)
        return result

    async def handle_modification(self) -> ReconciliationResult:
        return await self.handle_addition()

    async def handle_deletion(self) -> ReconciliationResult:
        _, result = await self._handle_in_diff()
        return result

    async def _handle_in_diff(self) -> tuple[TypeMembers, ReconciliationResult]:
        with time_block(f"classify {self.path}"):
            state = await self.classifier.aclassify(
                self.diff_source.produce_diff_lines(self.path, self.config)
            )
        result = self.reconciler.reconcile(state.added, state.removed)
        return state.added, result

    def _fill_file_member(self, package: TypeMembers) -> None:
        # the labels file has no member of its own, only its labels are deployed
        if self.file_type.directory_label == LABEL_EXTENSION:
            return
        member = PurePosixPath(self.path.replace("\\", "/")).name.split(".")[0]
        add_member(
            package, self.file_type.directory_label, clean_up_package_member(member)
        )

    async def _write_delta(self, added: TypeMembers) -> None:
        content = await self.file_reader.read(self.path)
        with time_block(f"rebuild {self.path}"):
            rebuilt = self.rebuilder.rebuild(content, added, self.path)
        await self.file_writer.write(self.path, rebuilt)
        logger.debug(f"Delta content written for {self.path}")
