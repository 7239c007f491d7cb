"""Implementation of the `livesmith info` command."""

from __future__ import annotations

from typing import Annotated

import typer

from livesmith.adapters.host import CollectingHost
from livesmith.core.exceptions import ShinyliveError
from livesmith.core.languages import Language
from livesmith.core.session import BuildSession
from livesmith.core.versions import check_assets_versions

from ..diagnostics import CliEmitter
from ..state import emit_error, emit_warning, get_cli_state


def info(
    languages: Annotated[
        list[Language] | None,
        typer.Argument(help="Languages to query (defaults to all supported languages)."),
    ] = None,
) -> None:
    """Report the shinylive tool versions installed for each language."""

    from rich.table import Table

    state = get_cli_state()
    session = BuildSession(CollectingHost(), emitter=CliEmitter(state))
    table = Table("Language", "Package version", "Assets version")
    failed = False

    for language in languages or list(Language):
        try:
            tool = session.fetch_tool_info(language)
        except ShinyliveError as exc:
            failed = True
            emit_warning(str(exc).strip(), exception=exc)
            continue
        table.add_row(language.value, tool.version, tool.assets_version)

    state.console.print(table)

    try:
        check_assets_versions(session.tool_info)
    except ShinyliveError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if failed:
        raise typer.Exit(code=1)


__all__ = ["info"]
