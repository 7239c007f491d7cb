"""Per-document build state for the shinylive filter.

A :class:`BuildSession` owns every piece of state that must survive between
code blocks of the same document: whether the language-agnostic dependencies
were registered, which languages finished their setup, the tool metadata
reported by each language, and the set of dependencies already handed to the
host. Hosts create one session per document build and drop it afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from enum import Enum
import logging
from typing import Any, Protocol

from .config import ShinyliveConfig
from .decoding import decode_tool_response
from .dependencies import DependencyAccumulator, dependency_key
from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import MalformedToolOutputError, NotInProjectContextError
from .host import DocumentHost
from .languages import Language
from .versions import CODEBLOCK_SCRIPT, ToolInfo, check_assets_versions


logger = logging.getLogger(__name__)


class Invoker(Protocol):
    def invoke(
        self,
        language: Language | str,
        arguments: Sequence[str],
        input_payload: str | None = None,
    ) -> str: ...


class SetupState(str, Enum):
    """Progress of the one-time setup of a language."""

    NOT_STARTED = "not-started"
    DONE = "done"


class BuildSession:
    """Explicit context shared by every block of a single document build."""

    def __init__(
        self,
        host: DocumentHost,
        *,
        invoker: Invoker | None = None,
        config: ShinyliveConfig | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        if invoker is None:
            from livesmith.adapters.tools import ToolInvoker

            invoker = ToolInvoker(emitter)
        self.host = host
        self.invoker = invoker
        self.config = config or ShinyliveConfig()
        self.emitter = emitter or NullEmitter()
        self.dependencies = DependencyAccumulator()
        self.tool_info: dict[Language, ToolInfo] = {}
        self.codeblock_script: str | None = None
        self.global_setup_done = False
        self._language_state: dict[Language, SetupState] = dict.fromkeys(
            Language, SetupState.NOT_STARTED
        )

    def language_state(self, language: Language | str) -> SetupState:
        return self._language_state[Language.coerce(language)]

    def call_tool(
        self,
        language: Language | str,
        arguments: Sequence[str],
        input_payload: str | None = None,
    ) -> Any:
        """Invoke the language's tool and decode its JSON response."""
        language = Language.coerce(language)
        raw = self.invoker.invoke(language, list(arguments), input_payload or "")
        return decode_tool_response(raw, language.value)

    def fetch_tool_info(self, language: Language | str) -> ToolInfo:
        """Query ``extension info`` and cache the result for ``language``."""
        language = Language.coerce(language)
        info = ToolInfo.from_payload(self.call_tool(language, ["extension", "info"]), language)
        self.tool_info[language] = info
        logger.debug(
            "%s shinylive %s supports assets %s",
            language.value,
            info.version,
            info.assets_version,
        )
        return info

    def ensure_global_setup(self, language: Language | str) -> None:
        """Register language-agnostic dependencies once per document."""
        if self.global_setup_done:
            return
        language = Language.coerce(language)

        info = self.tool_info.get(language) or self.fetch_tool_info(language)
        self.codeblock_script = info.codeblock_script
        if not self.codeblock_script:
            raise MalformedToolOutputError(
                f"The {language.value} shinylive info response does not provide "
                f"the '{CODEBLOCK_SCRIPT}' script."
            )

        for dep in self._base_dependencies(language):
            self._register(dep, self.host.add_dependency, scope="document")
        self._register(
            self.config.stylesheet_dependency(), self.host.add_dependency, scope="document"
        )
        self.global_setup_done = True

    def ensure_language_setup(self, language: Language | str) -> None:
        """Register dependencies specific to ``language`` once per document."""
        language = Language.coerce(language)
        self.ensure_global_setup(language)
        if self._language_state[language] is SetupState.DONE:
            return

        info = self.tool_info.get(language) or self.fetch_tool_info(language)
        check_assets_versions(self.tool_info)

        resources = self.call_tool(language, ["extension", "language-resources"])
        for resource in _as_descriptors(resources, "language-resources"):
            self.attach(resource)

        self._language_state[language] = SetupState.DONE
        self.emitter.event(
            "language_setup",
            {
                "language": language.value,
                "version": info.version,
                "assets_version": info.assets_version,
            },
        )

    def attach(self, payload: Mapping[str, Any]) -> bool:
        """Attach ``payload`` to the shinylive dependency unless already present."""
        name = self.config.dependency_name
        return self._register(
            payload,
            lambda dep: self.host.attach_to_dependency(name, dep),
            scope=name,
        )

    def _base_dependencies(self, language: Language) -> list[Mapping[str, Any]]:
        # The service worker lives at the project root, so the tool needs the
        # path from the current page back to it.
        offset = self.config.project_offset
        if offset is None:
            offset = self.host.project_offset
        if offset is None:
            raise NotInProjectContextError(
                "The shinylive extension must be used in a project directory "
                "(with a _quarto.yml file)."
            )
        deps = self.call_tool(language, ["extension", "base-htmldeps", "--sw-dir", offset])
        return _as_descriptors(deps, "base-htmldeps")

    def _register(
        self,
        payload: Mapping[str, Any],
        register: Callable[[Mapping[str, Any]], None],
        *,
        scope: str,
    ) -> bool:
        key = dependency_key(payload)
        added = self.dependencies.register_once(key, payload, register)
        if added:
            self.emitter.event("dependency_registered", {"key": key, "scope": scope})
        return added


def _as_descriptors(value: Any, request: str) -> list[Mapping[str, Any]]:
    if not isinstance(value, list) or not all(isinstance(item, Mapping) for item in value):
        raise MalformedToolOutputError(
            f"Expected a JSON array of objects from `extension {request}`."
        )
    return value


__all__ = ["BuildSession", "Invoker", "SetupState"]
