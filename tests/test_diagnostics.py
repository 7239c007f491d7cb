from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from livesmith.core.config import ShinyliveConfig
from livesmith.core.diagnostics import LoggingEmitter, format_event_message
from livesmith.ui.cli.diagnostics import CliEmitter
from livesmith.ui.cli.state import CLIState


def test_format_tool_invoke_event() -> None:
    message = format_event_message(
        "tool_invoke", {"language": "r", "arguments": ["extension", "info"]}
    )

    assert message == "Calling r shinylive: extension info"


def test_format_language_setup_event() -> None:
    message = format_event_message(
        "language_setup", {"language": "python", "version": "0.5.0", "assets_version": "0.4.1"}
    )

    assert message == "Prepared shinylive python resources (package 0.5.0, assets 0.4.1)"


def test_unknown_events_are_not_formatted() -> None:
    assert format_event_message("something_else", {}) is None


def test_logging_emitter_forwards_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(logger_obj=logging.getLogger("livesmith.tests"))

    with caplog.at_level(logging.INFO, logger="livesmith.tests"):
        emitter.event("dependency_registered", {"key": "numpy", "scope": "shinylive"})
        emitter.error("conversion failed")

    assert "Registered dependency: numpy [shinylive]" in caplog.text
    assert "conversion failed" in caplog.text


def test_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        ShinyliveConfig(sw_dir=".")  # type: ignore[call-arg]


def test_blank_project_offset_means_no_project() -> None:
    assert ShinyliveConfig(project_offset="  ").project_offset is None
    assert ShinyliveConfig(project_offset=".").project_offset == "."
    assert ShinyliveConfig().stylesheet_dependency() == {
        "name": "shinylive-quarto-css",
        "stylesheets": ["resources/css/shinylive-quarto.css"],
    }


@pytest.mark.parametrize(
    ("verbosity", "shown"),
    [(0, []), (1, ["Prepared"]), (2, ["Prepared", "Calling"])],
)
def test_cli_emitter_gates_events_on_verbosity(
    capsys: pytest.CaptureFixture[str], verbosity: int, shown: list[str]
) -> None:
    state = CLIState(verbosity=verbosity)
    emitter = CliEmitter(state)

    emitter.event(
        "language_setup", {"language": "python", "version": "0.5.0", "assets_version": "0.4.1"}
    )
    emitter.event("tool_invoke", {"language": "r", "arguments": ["extension", "info"]})

    err = capsys.readouterr().err
    assert [word for word in ("Prepared", "Calling") if word in err] == shown
    assert set(state.events) == {"language_setup", "tool_invoke"}
