"""Rewrite shinylive code blocks and resolve their app dependencies."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
import logging
from typing import Any

from .exceptions import ConversionError, ShinyliveError, ToolExecutionError
from .languages import Language, binding_for, classify_classes
from .session import BuildSession


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CodeBlock:
    """Mutable view of a code block handed over by the host."""

    text: str
    classes: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CodeBlockRequest:
    """App description produced by the ``codeblock-to-json`` script."""

    files: list[Any]
    quarto_args: list[Any] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> CodeBlockRequest:
        if not isinstance(payload, Mapping) or not isinstance(payload.get("files"), list):
            raise ConversionError("Code block conversion did not return a 'files' list.")
        quarto_args = payload.get("quartoArgs") or []
        if not isinstance(quarto_args, list):
            quarto_args = [quarto_args]
        return cls(files=list(payload["files"]), quarto_args=list(quarto_args))


class CodeBlockRewriter:
    """Entry point invoked by the host for every code block of a document."""

    def __init__(self, session: BuildSession) -> None:
        self.session = session

    def rewrite(self, block: CodeBlock) -> CodeBlock | None:
        """Rewrite ``block`` in place, or return ``None`` when it is not ours."""
        language = classify_classes(block.classes)
        if language is None:
            return None

        try:
            self.session.ensure_language_setup(language)
            request = self.convert(language, block.text)
            self.resolve_app_dependencies(language, request)
        except ShinyliveError as exc:
            self._report(exc)
            raise

        block.attributes["engine"] = language.value
        block.classes[:] = [binding_for(language).canonical_class]
        return block

    def convert(self, language: Language, text: str) -> CodeBlockRequest:
        """Turn the raw block text into the files of the embedded app."""
        script = self.session.codeblock_script
        if not script:
            raise ConversionError("The codeblock-to-json script location is unknown.")
        command = self.session.config.quarto_executable
        try:
            output = self.session.host.run(command, ["run", script, language.value], text)
        except (ToolExecutionError, OSError) as exc:
            raise ConversionError(
                f"Failed to convert {language.value} shinylive code block: {exc}"
            ) from exc
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as exc:
            raise ConversionError(
                f"Could not decode the converted {language.value} code block: {exc}"
            ) from exc
        return CodeBlockRequest.from_payload(payload)

    def resolve_app_dependencies(self, language: Language, request: CodeBlockRequest) -> int:
        """Attach the app's resources, returning how many were new."""
        deps = self.session.call_tool(
            language,
            ["extension", "app-resources"],
            json.dumps(request.files),
        )
        if not isinstance(deps, list):
            deps = []
            logger.debug("app-resources for %s returned no dependency list", language.value)
        added = 0
        for dep in deps:
            if isinstance(dep, Mapping) and self.session.attach(dep):
                added += 1
        return added

    def _report(self, exc: ShinyliveError) -> None:
        if getattr(exc, "_livesmith_logged", False):
            return
        self.session.emitter.error(str(exc).strip(), exc)
        exc._livesmith_logged = True  # noqa: SLF001


__all__ = ["CodeBlock", "CodeBlockRequest", "CodeBlockRewriter"]
