from __future__ import annotations

from collections.abc import Callable, Sequence
import json
from typing import Any

import pytest

from livesmith.adapters.host import CollectingHost
from livesmith.core.config import ShinyliveConfig
from livesmith.core.diagnostics import NullEmitter
from livesmith.core.languages import Language
from livesmith.core.session import BuildSession


def info_payload(version: str = "0.5.0", assets: str = "0.4.1") -> str:
    return json.dumps(
        {
            "version": version,
            "assets_version": assets,
            "scripts": {"codeblock-to-json": "/opt/shinylive/codeblock-to-json.js"},
        }
    )


class FakeInvoker:
    """Answer ``extension`` requests from canned responses."""

    def __init__(self, responses: dict[tuple[Language, str], Any] | None = None) -> None:
        self.responses: dict[tuple[Language, str], Any] = {}
        for language in Language:
            self.responses[(language, "info")] = info_payload()
            self.responses[(language, "base-htmldeps")] = json.dumps(
                [{"name": "shinylive", "version": "0.4.1", "scripts": ["shinylive.js"]}]
            )
            self.responses[(language, "language-resources")] = json.dumps(
                [{"name": f"shinylive/{language.value}/runtime.js", "path": "/runtime.js"}]
            )
            self.responses[(language, "app-resources")] = json.dumps([])
        self.responses.update(responses or {})
        self.calls: list[tuple[Language, list[str], str | None]] = []

    def invoke(
        self,
        language: Language | str,
        arguments: Sequence[str],
        input_payload: str | None = None,
    ) -> str:
        language = Language.coerce(language)
        self.calls.append((language, list(arguments), input_payload))
        response = self.responses[(language, arguments[1])]
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(input_payload)
        return response

    def requests(self, language: Language | None = None) -> list[str]:
        return [args[1] for lang, args, _ in self.calls if language is None or lang is language]


class RecordingEmitter(NullEmitter):
    def __init__(self) -> None:
        self.errors: list[tuple[str, BaseException | None]] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append((message, exc))

    def event(self, name: str, payload: Any) -> None:
        self.events.append((name, dict(payload)))


class ScriptedHost(CollectingHost):
    """Host whose conversion command returns a canned app description."""

    def __init__(self, project_offset: str | None = ".", files: list[Any] | None = None) -> None:
        super().__init__(project_offset=project_offset)
        self.files = files if files is not None else [{"name": "app.py", "content": "..."}]
        self.runs: list[tuple[str, list[str], str]] = []
        self.output: str | None = None

    def run(self, command: str, arguments: Sequence[str], input_payload: str) -> str:
        self.runs.append((command, list(arguments), input_payload))
        if self.output is not None:
            return self.output
        return json.dumps({"files": self.files, "quartoArgs": []})


@pytest.fixture
def info_json() -> Callable[..., str]:
    return info_payload


@pytest.fixture
def make_invoker() -> type[FakeInvoker]:
    return FakeInvoker


@pytest.fixture
def make_host() -> type[ScriptedHost]:
    return ScriptedHost


@pytest.fixture
def invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def host() -> ScriptedHost:
    return ScriptedHost()


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def session(host: ScriptedHost, invoker: FakeInvoker, emitter: RecordingEmitter) -> BuildSession:
    return BuildSession(host, invoker=invoker, config=ShinyliveConfig(), emitter=emitter)
