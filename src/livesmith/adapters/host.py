"""In-memory document host used outside of a full rendering pipeline."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .tools import pipe


@dataclass(slots=True)
class CollectingHost:
    """Host that records dependencies and runs commands as subprocesses."""

    project_offset: str | None = None
    html_dependencies: list[dict[str, Any]] = field(default_factory=list)
    attachments: dict[str, list[dict[str, Any]]] = field(default_factory=dict)

    def add_dependency(self, payload: Mapping[str, Any]) -> None:
        self.html_dependencies.append(dict(payload))

    def attach_to_dependency(self, name: str, payload: Mapping[str, Any]) -> None:
        self.attachments.setdefault(name, []).append(dict(payload))

    def run(self, command: str, arguments: Sequence[str], input_payload: str) -> str:
        return pipe(command, arguments, input_payload)

    def manifest(self) -> dict[str, Any]:
        """Return the collected dependencies as a JSON-serialisable mapping."""
        return {
            "html_dependencies": [dict(dep) for dep in self.html_dependencies],
            "attachments": {name: list(items) for name, items in self.attachments.items()},
        }

    def clear(self) -> None:
        self.html_dependencies.clear()
        self.attachments.clear()


__all__ = ["CollectingHost"]
