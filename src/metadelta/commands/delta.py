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
from pathlib import Path

import typer
from colorama import Fore, Style, init
from loguru import logger

from metadelta.constants import ADDITION, DELETION, MODIFICATION
from metadelta.context import GlobalContext
from metadelta.core.data.models import DeltaManifest, TypeMembers
from metadelta.core.diff_source.git_diff_source import GitDiffLineSource
from metadelta.core.exceptions import handle_metadelta_exception, metadeltaError
from metadelta.core.file_reader.git_file_reader import GitFileReader
from metadelta.core.file_reader.output_file_writer import OutputFileWriter
from metadelta.core.logging.utils import time_block
from metadelta.pipelines.in_file_pipeline import InFileDeltaPipeline

init(autoreset=True)

HANDLED_CHANGES = {ADDITION, MODIFICATION, DELETION}


def create_pipelines(
    global_context: GlobalContext, paths: list[str]
) -> list[tuple[str, str, InFileDeltaPipeline]]:
    config = global_context.config
    git_commands = global_context.git_commands

    diff_source = GitDiffLineSource(git_commands)
    file_reader = GitFileReader(git_commands, global_context.repo_path, config.to_rev)
    file_writer = OutputFileWriter(Path(config.output))

    changes = git_commands.name_status(config.from_rev, config.to_rev, paths)
    if not changes:
        logger.info("[yellow]No changes found for the given paths[/yellow]")

    pipelines = []
    for change_type, path in changes:
        file_type = global_context.registry.resolve_for_path(path)
        if file_type is None:
            logger.warning(f"Skipping {path}: not a multi-entity metadata file")
            continue
        if change_type not in HANDLED_CHANGES:
            logger.warning(f"Skipping {path}: unsupported change type {change_type}")
            continue

        pipeline = InFileDeltaPipeline(
            path,
            file_type,
            global_context.registry,
            config,
            diff_source,
            file_reader,
            file_writer,
        )
        pipelines.append((path, change_type, pipeline))

    return pipelines


async def run_pipelines(
    pipelines: list[tuple[str, str, InFileDeltaPipeline]],
) -> tuple[DeltaManifest, list[str]]:
    """
    Runs every file pipeline concurrently. A file that fails is reported and
    does not prevent the other files from completing.
    """
    results = await asyncio.gather(
        *(pipeline.handle(change_type) for _, change_type, pipeline in pipelines),
        return_exceptions=True,
    )

    manifest = DeltaManifest()
    failed = []
    for (path, _, _), result in zip(pipelines, results, strict=True):
        if isinstance(result, metadeltaError):
            logger.error(f"[red]{path}:[/red] {result.message}")
            if result.details:
                logger.debug(f"Details: {result.details}")
            failed.append(path)
        elif isinstance(result, Exception):
            logger.opt(exception=result).error(f"[red]{path}:[/red] unexpected error")
            failed.append(path)
        elif isinstance(result, BaseException):
            raise result
        else:
            manifest.merge(result)

    return manifest, failed


def display_members(title: str, members: TypeMembers) -> None:
    print(f"{Fore.WHITE}{Style.BRIGHT}{title}{Style.RESET_ALL}")
    if not members:
        print(f"  {Fore.YELLOW}(none){Style.RESET_ALL}")
    for metadata_type in sorted(members):
        print(f"  {Fore.CYAN}{Style.BRIGHT}{metadata_type}{Style.RESET_ALL}")
        for member in sorted(members[metadata_type]):
            print(f"    {Fore.GREEN}{member}{Style.RESET_ALL}")
    print()


def main(
    ctx: typer.Context,
    paths: list[str] = typer.Argument(
        ..., help="Multi-entity metadata files to compute the delta for."
    ),
) -> None:
    """
    Computes which entities of multi-entity metadata files were added,
    modified or removed between two revisions.

    Examples:
        # Delta of the labels file against the previous commit
        mdelta delta force-app/main/default/labels/CustomLabels.labels-meta.xml

        # Also write the reduced files under ./output
        mdelta --generate-delta --from-rev main delta force-app/main/default/workflows
    """
    with handle_metadelta_exception():
        global_context: GlobalContext = ctx.obj

        pipelines = create_pipelines(global_context, paths)

        with time_block("Delta Command E2E"):
            manifest, failed = asyncio.run(run_pipelines(pipelines))

        if not global_context.config.silent:
            display_members("Package", manifest.package)
            display_members("Destructive changes", manifest.destructive_changes)

        if failed:
            logger.error(f"[red]{len(failed)} file(s) failed:[/red] {', '.join(failed)}")
            raise typer.Exit(1)

        logger.info("Delta command completed successfully")
