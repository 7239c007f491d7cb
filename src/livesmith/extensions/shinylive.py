"""Markdown extension turning ``{shinylive-*}`` fences into shinylive apps."""

from __future__ import annotations

from html import escape
import re

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from ..adapters.host import CollectingHost
from ..core.config import ShinyliveConfig
from ..core.diagnostics import DiagnosticEmitter
from ..core.host import DocumentHost
from ..core.rewriter import CodeBlock, CodeBlockRewriter
from ..core.session import BuildSession, Invoker


_CONFIG_KEYS = ("project_offset", "quarto_executable", "dependency_name", "stylesheet")


def render_code_block(block: CodeBlock) -> str:
    """Return the HTML markup of a rewritten code block."""
    attrs = [f'class="{escape(" ".join(block.classes))}"']
    attrs.extend(
        f'data-{escape(key)}="{escape(value)}"' for key, value in block.attributes.items()
    )
    body = escape(block.text, quote=False)
    return f"<pre {' '.join(attrs)}><code>{body}</code></pre>"


class _ShinylivePreprocessor(Preprocessor):
    """Hand every fenced block to the rewriter before regular fences run.

    Only top-level fences indented by at most three spaces are recognised.
    Fences nested in list items or blockquotes are left to the regular fence
    processors and keep their raw ``{shinylive-*}`` class.
    """

    _FENCE_RE = re.compile(r"^(?P<indent>\s{0,3})(?P<fence>`{3,}|~{3,})\s*(?P<info>[^`]*?)\s*$")

    def __init__(self, md: Markdown, extension: ShinyliveExtension) -> None:
        super().__init__(md)
        self._extension = extension

    def run(self, lines: list[str]) -> list[str]:
        result: list[str] = []
        index = 0
        total = len(lines)

        while index < total:
            line = lines[index]
            match = self._FENCE_RE.match(line)
            if not match:
                result.append(line)
                index += 1
                continue

            fence = match.group("fence")
            end = self._find_closing(lines, index + 1, fence)
            if end is None:
                # No closing fence; fall back to raw lines
                result.extend(lines[index:])
                break

            block = CodeBlock(
                text="\n".join(lines[index + 1 : end]),
                classes=match.group("info").split(),
            )
            rewritten = self._extension.rewriter.rewrite(block)
            if rewritten is None:
                result.extend(lines[index : end + 1])
            else:
                placeholder = self.md.htmlStash.store(render_code_block(rewritten))
                result.extend(["", placeholder, ""])
            index = end + 1

        return result

    def _find_closing(self, lines: list[str], start: int, fence: str) -> int | None:
        for position in range(start, len(lines)):
            candidate = lines[position].strip()
            if (
                candidate
                and candidate[0] == fence[0]
                and len(candidate) >= len(fence)
                and candidate == candidate[0] * len(candidate)
            ):
                return position
        return None


class ShinyliveExtension(Extension):
    """Register the shinylive fence preprocessor and its build session."""

    def __init__(
        self,
        *,
        invoker: Invoker | None = None,
        emitter: DiagnosticEmitter | None = None,
        host: DocumentHost | None = None,
        **kwargs: object,
    ) -> None:
        self.config = {
            "project_offset": ["", "Relative path from the page to the project root."],
            "quarto_executable": ["quarto", "Command running the codeblock-to-json script."],
            "dependency_name": ["shinylive", "Dependency receiving app resources."],
            "stylesheet": [
                "resources/css/shinylive-quarto.css",
                "Stylesheet registered with the base dependencies.",
            ],
        }
        super().__init__(**kwargs)
        self._invoker = invoker
        self._emitter = emitter
        self._host = host
        self.md: Markdown | None = None
        self.session: BuildSession | None = None
        self.rewriter: CodeBlockRewriter | None = None

    def settings(self) -> ShinyliveConfig:
        """Return the validated filter configuration."""
        return ShinyliveConfig(**{key: self.getConfig(key) for key in _CONFIG_KEYS})

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        self.md = md
        md.registerExtension(self)
        self.reset()
        md.preprocessors.register(
            _ShinylivePreprocessor(md, self), "livesmith_shinylive", priority=28
        )

    def reset(self) -> None:
        """Start a fresh build session for the next document."""
        settings = self.settings()
        host = self._host
        if host is None:
            host = CollectingHost(project_offset=settings.project_offset)
        elif isinstance(host, CollectingHost):
            host.clear()
        self.session = BuildSession(
            host,
            invoker=self._invoker,
            config=settings,
            emitter=self._emitter,
        )
        self.rewriter = CodeBlockRewriter(self.session)
        if self.md is not None:
            self.md.shinylive_session = self.session  # type: ignore[attr-defined]


def makeExtension(  # noqa: N802 - Markdown expects this entry point name
    **kwargs: object,
) -> ShinyliveExtension:  # pragma: no cover - entry point
    return ShinyliveExtension(**kwargs)


__all__ = ["ShinyliveExtension", "makeExtension", "render_code_block"]
