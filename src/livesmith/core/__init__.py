"""Core orchestration for resolving shinylive code blocks."""

from __future__ import annotations

from .config import ShinyliveConfig
from .decoding import decode_tool_response, find_json_start, strip_preamble
from .dependencies import DependencyAccumulator, dependency_key
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .exceptions import (
    AssetsVersionMismatchError,
    ConversionError,
    JsonDecodeError,
    MalformedToolOutputError,
    NotInProjectContextError,
    ShinyliveError,
    ToolExecutionError,
    ToolNotFoundError,
    UnknownLanguageError,
)
from .host import DocumentHost
from .languages import LANGUAGE_BINDINGS, Language, LanguageBinding
from .rewriter import CodeBlock, CodeBlockRequest, CodeBlockRewriter
from .session import BuildSession, SetupState
from .versions import ToolInfo, check_assets_versions


__all__ = [
    "LANGUAGE_BINDINGS",
    "AssetsVersionMismatchError",
    "BuildSession",
    "CodeBlock",
    "CodeBlockRequest",
    "CodeBlockRewriter",
    "ConversionError",
    "DependencyAccumulator",
    "DiagnosticEmitter",
    "DocumentHost",
    "JsonDecodeError",
    "Language",
    "LanguageBinding",
    "LoggingEmitter",
    "MalformedToolOutputError",
    "NotInProjectContextError",
    "NullEmitter",
    "SetupState",
    "ShinyliveConfig",
    "ShinyliveError",
    "ToolExecutionError",
    "ToolInfo",
    "ToolNotFoundError",
    "UnknownLanguageError",
    "check_assets_versions",
    "decode_tool_response",
    "dependency_key",
    "find_json_start",
    "strip_preamble",
]
