"""Interface implemented by document hosts that embed the shinylive filter."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentHost(Protocol):
    """Services the filter needs from the document-processing host."""

    @property
    def project_offset(self) -> str | None:
        """Relative path from the current document to the project root."""
        ...

    def add_dependency(self, payload: Mapping[str, Any]) -> None:
        """Attach a document-wide HTML dependency."""
        ...

    def attach_to_dependency(self, name: str, payload: Mapping[str, Any]) -> None:
        """Attach a resource to the HTML dependency called ``name``."""
        ...

    def run(self, command: str, arguments: Sequence[str], input_payload: str) -> str:
        """Run ``command`` with ``input_payload`` on stdin and return stdout."""
        ...


__all__ = ["DocumentHost"]
