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

from dataclasses import MISSING, dataclass, fields
from pathlib import Path

from metadelta.core.git_commands.git_commands import GitCommands
from metadelta.core.git_interface.interface import GitInterface
from metadelta.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)
from metadelta.core.registry.registry import MetadataRegistry


@dataclass
class GlobalConfig:
    from_rev: str = "HEAD~1"
    to_rev: str | None = None
    output: str = "output"
    generate_delta: bool = False
    ignore_whitespace: bool = False
    diff_context_lines: int = 200
    metadata_registry: str | None = None
    verbose: bool = False
    silent: bool = False

    descriptions = {
        "from_rev": "Base revision the diff starts from",
        "to_rev": "Target revision of the diff (working tree when unset)",
        "output": "Directory the rewritten delta files are written to",
        "generate_delta": "Rewrite each changed file so it only keeps added or modified entities",
        "ignore_whitespace": "Ignore whitespace-only changes in the diff",
        "diff_context_lines": "Context lines requested from git diff around each change",
        "metadata_registry": "TOML file replacing the built-in metadata type registry",
        "verbose": "Enable verbose logging output",
        "silent": "Do not output any text to the console",
    }

    @classmethod
    def get_cli_params(cls) -> dict[str, tuple[type, object]]:
        """
        Typer options for every config field, keyed by field name.

        Defaults are None so that only explicitly passed flags override
        the other configuration sources.
        """
        import typer

        params = {}
        for field in fields(cls):
            option_name = "--" + field.name.replace("_", "-")
            default = field.default if field.default is not MISSING else None
            params[field.name] = (
                field.type | None,
                typer.Option(
                    None,
                    option_name,
                    help=f"{cls.descriptions.get(field.name, '')} (default: {default})",
                ),
            )
        return params


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    git_interface: GitInterface
    git_commands: GitCommands
    registry: MetadataRegistry
    config: GlobalConfig

    @classmethod
    def from_global_config(cls, config: GlobalConfig, repo_path: Path):
        if config.metadata_registry is not None:
            registry = MetadataRegistry.load_toml(Path(config.metadata_registry))
        else:
            registry = MetadataRegistry.default()

        git_interface = SubprocessGitInterface(repo_path)
        git_commands = GitCommands(git_interface)

        return GlobalContext(repo_path, git_interface, git_commands, registry, config)
