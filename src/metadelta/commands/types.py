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

import typer
from colorama import Fore, Style, init

from metadelta.context import GlobalContext
from metadelta.core.exceptions import handle_metadelta_exception

init(autoreset=True)


def main(ctx: typer.Context) -> None:
    """
    Lists the multi-entity metadata families and the entity tags found in their files.
    """
    with handle_metadelta_exception():
        global_context: GlobalContext = ctx.obj
        registry = global_context.registry

        for parent in registry.in_file_parents():
            print(
                f"{Fore.CYAN}{Style.BRIGHT}{parent.type}{Style.RESET_ALL} "
                f"{Fore.WHITE}({parent.directory_label}){Style.RESET_ALL}"
            )
            for child in registry.children_of(parent.type):
                standalone = " [standalone]" if child.standalone else ""
                print(
                    f"  {Fore.GREEN}<{child.xml_tag}>{Style.RESET_ALL} "
                    f"{child.type} -> {child.directory_label}"
                    f"{Fore.YELLOW}{standalone}{Style.RESET_ALL}"
                )
            print()
