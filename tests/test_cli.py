from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from livesmith.adapters import tools as tools_mod
from livesmith.ui.cli import app
from livesmith.ui.cli.commands.render import manifest_path_for


class _StubResult:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


RESPONSES = {
    "info": json.dumps(
        {
            "version": "0.5.0",
            "assets_version": "0.4.1",
            "scripts": {"codeblock-to-json": "/opt/shinylive/codeblock-to-json.js"},
        }
    ),
    "base-htmldeps": json.dumps([{"name": "shinylive", "scripts": ["shinylive.js"]}]),
    "language-resources": json.dumps([{"name": "pyodide", "path": "/pyodide.js"}]),
    "app-resources": json.dumps([{"name": "numpy", "path": "/numpy.whl"}]),
}


@pytest.fixture
def fake_tools(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    commands: list[list[str]] = []

    def fake_run(cmd: list[str], **kwargs: Any) -> _StubResult:
        commands.append(cmd)
        if cmd[0] == "quarto":
            return _StubResult(stdout=json.dumps({"files": [], "quartoArgs": []}))
        request = cmd[cmd.index("extension") + 1]
        return _StubResult(stdout="Loading...\n" + RESPONSES[request])

    monkeypatch.setattr(tools_mod.shutil, "which", lambda name: None)
    monkeypatch.setattr(tools_mod.subprocess, "run", fake_run)
    return commands


def _write_document(tmp_path: Path) -> Path:
    source = tmp_path / "page.md"
    source.write_text("# App\n\n```{shinylive-python}\nimport numpy\n```\n", encoding="utf-8")
    return source


def test_render_writes_html_and_manifest(tmp_path: Path, fake_tools: list[list[str]]) -> None:
    source = _write_document(tmp_path)
    output = tmp_path / "out" / "page.html"

    result = CliRunner().invoke(
        app,
        ["render", str(source), "--project-offset", ".", "-o", str(output), "--manifest"],
    )

    assert result.exit_code == 0, result.output
    assert 'class="shinylive-python" data-engine="python"' in output.read_text(encoding="utf-8")
    manifest = json.loads(manifest_path_for(output, source).read_text(encoding="utf-8"))
    assert [dep["name"] for dep in manifest["attachments"]["shinylive"]] == ["pyodide", "numpy"]
    assert ["quarto", "run", "/opt/shinylive/codeblock-to-json.js", "python"] in fake_tools


def test_render_prints_html_to_stdout(tmp_path: Path, fake_tools: list[list[str]]) -> None:
    source = _write_document(tmp_path)

    result = CliRunner().invoke(app, ["render", str(source), "--project-offset", "."])

    assert result.exit_code == 0
    assert "<h1>App</h1>" in result.stdout


def test_render_reports_missing_project(tmp_path: Path, fake_tools: list[list[str]]) -> None:
    source = _write_document(tmp_path)

    result = CliRunner().invoke(app, ["render", str(source)])

    assert result.exit_code == 1
    assert "project directory" in result.output


def test_render_reports_tool_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _write_document(tmp_path)
    monkeypatch.setattr(tools_mod.shutil, "which", lambda name: None)

    def missing(cmd: list[str], **kwargs: Any) -> _StubResult:
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(tools_mod.subprocess, "run", missing)

    result = CliRunner().invoke(app, ["render", str(source), "--project-offset", "."])

    assert result.exit_code == 1
    assert "shinylive" in result.output


def test_info_lists_tool_versions(fake_tools: list[list[str]]) -> None:
    result = CliRunner().invoke(app, ["info"])

    assert result.exit_code == 0, result.output
    assert "0.5.0" in result.output
    assert "0.4.1" in result.output
    assert ["Rscript", "-e", "shinylive:::quarto_ext()", "extension", "info"] in fake_tools


def test_manifest_path_defaults_to_source(tmp_path: Path) -> None:
    assert manifest_path_for(None, tmp_path / "doc.md") == tmp_path / "doc.dependencies.json"
