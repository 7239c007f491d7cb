"""Resolve shinylive code blocks and their HTML dependencies at build time.

Typical usage from Python::

    from livesmith import ShinyliveConfig, render_markdown

    document = render_markdown(source, config=ShinyliveConfig(project_offset="."))
    document.html, document.dependencies
"""

from __future__ import annotations

from .adapters.host import CollectingHost
from .adapters.markdown import MarkdownDocument, render_markdown
from .adapters.tools import ToolInvoker
from .core import (
    AssetsVersionMismatchError,
    BuildSession,
    CodeBlock,
    CodeBlockRewriter,
    ConversionError,
    DocumentHost,
    JsonDecodeError,
    Language,
    MalformedToolOutputError,
    NotInProjectContextError,
    ShinyliveConfig,
    ShinyliveError,
    ToolExecutionError,
    ToolInfo,
    ToolNotFoundError,
    UnknownLanguageError,
)
from .extensions import ShinyliveExtension
from .version import get_version


__version__ = get_version()

__all__ = [
    "AssetsVersionMismatchError",
    "BuildSession",
    "CodeBlock",
    "CodeBlockRewriter",
    "CollectingHost",
    "ConversionError",
    "DocumentHost",
    "JsonDecodeError",
    "Language",
    "MalformedToolOutputError",
    "MarkdownDocument",
    "NotInProjectContextError",
    "ShinyliveConfig",
    "ShinyliveError",
    "ShinyliveExtension",
    "ToolExecutionError",
    "ToolInfo",
    "ToolInvoker",
    "ToolNotFoundError",
    "UnknownLanguageError",
    "__version__",
    "render_markdown",
]
