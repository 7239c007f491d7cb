"""Custom exception hierarchy for the shinylive document filter."""

from __future__ import annotations


class ShinyliveError(RuntimeError):
    """Base exception for failures that abort a document build."""


class ToolExecutionError(ShinyliveError):
    """Raised when an external shinylive tool fails to execute properly."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        self.hint = hint
        if hint:
            message = f"{message}\n{hint}"
        super().__init__(message)


class ToolNotFoundError(ToolExecutionError):
    """Raised when an external tool executable cannot be launched."""


class MalformedToolOutputError(ShinyliveError):
    """Raised when a tool response does not contain a JSON object or array."""

    def __init__(self, message: str, *, excerpt: str = "") -> None:
        self.excerpt = excerpt
        super().__init__(message)


class JsonDecodeError(ShinyliveError):
    """Raised when a tool response looks like JSON but cannot be decoded."""

    def __init__(self, message: str, *, payload: str = "", detail: str = "") -> None:
        self.payload = payload
        self.detail = detail
        super().__init__(message)


class NotInProjectContextError(ShinyliveError):
    """Raised when the host cannot locate the project root of the document."""


class AssetsVersionMismatchError(ShinyliveError):
    """Raised when two languages require different shinylive assets versions."""


class ConversionError(ShinyliveError):
    """Raised when a code block cannot be converted into an app request."""


class UnknownLanguageError(ShinyliveError):
    """Raised when an unsupported language reaches tool dispatch."""


__all__ = [
    "AssetsVersionMismatchError",
    "ConversionError",
    "JsonDecodeError",
    "MalformedToolOutputError",
    "NotInProjectContextError",
    "ShinyliveError",
    "ToolExecutionError",
    "ToolNotFoundError",
    "UnknownLanguageError",
]
