"""Implementation of the `livesmith render` command."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from livesmith.adapters.markdown import render_markdown, resolve_markdown_extensions
from livesmith.core.config import ShinyliveConfig
from livesmith.core.exceptions import ShinyliveError

from .._options import (
    DisableMarkdownExtensionsOption,
    InputPathArgument,
    ManifestOption,
    MarkdownExtensionsOption,
    OutputPathOption,
    ProjectOffsetOption,
    QuartoExecutableOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, get_cli_state


def manifest_path_for(output: Path | None, source: Path) -> Path:
    """Return where the dependency manifest of ``source`` is written."""
    anchor = output if output is not None else source
    return anchor.with_name(f"{anchor.stem}.dependencies.json")


def render(
    input_path: InputPathArgument,
    output: OutputPathOption = None,
    manifest: ManifestOption = False,
    project_offset: ProjectOffsetOption = None,
    quarto_executable: QuartoExecutableOption = "quarto",
    markdown_extensions: MarkdownExtensionsOption = None,
    disable_markdown_extensions: DisableMarkdownExtensionsOption = None,
) -> None:
    """Render a Markdown document, resolving its shinylive code blocks."""

    state = get_cli_state()
    config = ShinyliveConfig(project_offset=project_offset, quarto_executable=quarto_executable)
    extensions = resolve_markdown_extensions(markdown_extensions, disable_markdown_extensions)
    source = input_path.read_text(encoding="utf-8")

    try:
        document = render_markdown(
            source,
            extensions,
            config=config,
            emitter=CliEmitter(state),
        )
    except ShinyliveError as exc:
        if state.show_tracebacks:
            raise
        emit_error(str(exc).strip(), exception=exc)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(document.html)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document.html, encoding="utf-8")

    if manifest:
        target = manifest_path_for(output, input_path)
        target.write_text(json.dumps(document.dependencies, indent=2), encoding="utf-8")
        state.record_event("manifest", {"path": str(target)})


__all__ = ["manifest_path_for", "render"]
