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

from pathlib import Path

from platformdirs import user_config_dir, user_log_path

APP_NAME = "metadelta"
ENV_APP_PREFIX = APP_NAME.upper() + "_"
LOG_DIR = Path(user_log_path(appname=APP_NAME))

CONFIG_FILENAME = "metadeltaconfig.toml"

GLOBAL_CONFIG_FILE = Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME
LOCAL_CONFIG_FILE = Path(CONFIG_FILENAME)

# git diff line markers
PLUS = "+"
MINUS = "-"
HUNK_HEADER = "@@"

FULLNAME = "fullName"

# the custom labels family carries no file-level member of its own
LABEL_EXTENSION = "labels"

# git name-status letters handled by the in-file pipeline
ADDITION = "A"
MODIFICATION = "M"
DELETION = "D"
