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

import os
from dataclasses import fields
from pathlib import Path

import tomllib
from loguru import logger
from pydantic import TypeAdapter

from metadelta.constants import ENV_APP_PREFIX, GLOBAL_CONFIG_FILE, LOCAL_CONFIG_FILE
from metadelta.context import GlobalConfig

_CONFIG_ADAPTER = TypeAdapter(GlobalConfig)
CONFIG_KEYS = frozenset(field.name for field in fields(GlobalConfig))


class ConfigLoader:
    """Builds the GlobalConfig from every configuration source."""

    @staticmethod
    def get_full_config(
        input_args: dict,
        custom_config_path: Path | None = None,
        local_config_path: Path = LOCAL_CONFIG_FILE,
        env_app_prefix: str = ENV_APP_PREFIX,
        global_config_path: Path = GLOBAL_CONFIG_FILE,
    ) -> tuple[GlobalConfig, list[str]]:
        """
        Merges the sources with priority: input args, custom config, local
        config, environment variables, global config. Returns the config and
        the names of the sources that contributed to it.
        """
        sources = [("Input Args", input_args)]
        if custom_config_path is not None:
            sources.append(("Custom Config", ConfigLoader.load_toml(custom_config_path)))
        sources += [
            ("Local Config", ConfigLoader.load_toml(local_config_path)),
            ("Environment Variables", ConfigLoader.load_env(env_app_prefix)),
            ("Global Config", ConfigLoader.load_toml(global_config_path)),
        ]

        merged = {}
        used_sources = []
        for name, source in sources:
            logger.debug(f"{name=} {source=}")
            contributions = {
                key: value
                for key, value in source.items()
                if key in CONFIG_KEYS and key not in merged
            }
            if contributions:
                used_sources.append(name)
                merged.update(contributions)

        return _CONFIG_ADAPTER.validate_python(merged), used_sources

    @staticmethod
    def load_toml(path: Path) -> dict:
        """Returns the TOML table of a file, or an empty dict when it is missing or invalid."""
        if not path.exists():
            logger.debug(f"{path} does not exist")
            return {}

        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"Failed to load {path}: {e}")
            return {}

    @staticmethod
    def load_env(app_prefix: str) -> dict:
        """METADELTA_GENERATE_DELTA=true gives {"generate_delta": "true"}."""
        return {
            key[len(app_prefix) :].lower(): value
            for key, value in os.environ.items()
            if key.lower().startswith(app_prefix.lower())
        }
