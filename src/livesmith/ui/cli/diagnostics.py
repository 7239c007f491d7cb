"""Diagnostic emitter printing build progress on the CLI consoles."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from livesmith.core.diagnostics import DiagnosticEmitter, format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


# Per-call chatter only shows up with -vv.
EVENT_VERBOSITY: dict[str, int] = {
    "language_setup": 1,
    "tool_invoke": 2,
    "dependency_registered": 2,
}


class CliEmitter(DiagnosticEmitter):
    """Report shinylive setup, tool calls and registrations on stderr."""

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self._state = state or get_cli_state()
        if debug_enabled is None:
            debug_enabled = self._state.show_tracebacks
        self.debug_enabled = bool(debug_enabled)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        self._state.record_event(name, data)
        message = format_event_message(name, data)
        if message:
            render_message(
                "info", message, verbosity=EVENT_VERBOSITY.get(name, 1), state=self._state
            )


__all__ = ["EVENT_VERBOSITY", "CliEmitter"]
