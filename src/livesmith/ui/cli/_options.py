"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
SHINYLIVE_PANEL = "Shinylive"
OUTPUT_PANEL = "Output"

InputPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="INPUT",
        help="Markdown (.md or .qmd) document containing shinylive code blocks.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

MarkdownExtensionsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--enable-extension",
        "-x",
        help="Additional Markdown extensions to enable (comma or space separated).",
        rich_help_panel=INPUTS_PANEL,
    ),
]

DisableMarkdownExtensionsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--disable-extension",
        "-d",
        help="Default Markdown extensions to disable.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

ProjectOffsetOption = Annotated[
    str | None,
    typer.Option(
        "--project-offset",
        help="Relative path from the document to the project root (e.g. '.' or '..').",
        rich_help_panel=SHINYLIVE_PANEL,
    ),
]

QuartoExecutableOption = Annotated[
    str,
    typer.Option(
        "--quarto",
        help="Command used to run the codeblock-to-json conversion script.",
        rich_help_panel=SHINYLIVE_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the rendered HTML to this file instead of stdout.",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ManifestOption = Annotated[
    bool,
    typer.Option(
        "--manifest/--no-manifest",
        help="Write the collected HTML dependencies as JSON next to the output.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]
