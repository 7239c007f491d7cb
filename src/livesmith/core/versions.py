"""Tool metadata and cross-language assets version checks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .exceptions import AssetsVersionMismatchError, MalformedToolOutputError
from .languages import Language


CODEBLOCK_SCRIPT = "codeblock-to-json"


@dataclass(frozen=True, slots=True)
class ToolInfo:
    """Versions and helper scripts reported by ``extension info``."""

    version: str
    assets_version: str
    scripts: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any, language: Language) -> ToolInfo:
        """Build tool metadata from a decoded ``extension info`` response."""
        if not isinstance(payload, Mapping):
            raise MalformedToolOutputError(
                f"Expected a JSON object from the {language.value} shinylive info command."
            )
        missing = [key for key in ("version", "assets_version") if payload.get(key) is None]
        if missing:
            raise MalformedToolOutputError(
                f"The {language.value} shinylive info response is missing: {', '.join(missing)}"
            )
        scripts = payload.get("scripts") or {}
        if not isinstance(scripts, Mapping):
            raise MalformedToolOutputError(
                f"The {language.value} shinylive info response has invalid 'scripts'."
            )
        for key in ("version", "assets_version"):
            if not isinstance(payload[key], str):
                raise MalformedToolOutputError(
                    f"The {language.value} shinylive info response has a non-string '{key}'."
                )
        return cls(
            version=payload["version"],
            assets_version=payload["assets_version"],
            scripts=MappingProxyType(
                {str(k): v for k, v in scripts.items() if isinstance(v, str) and v}
            ),
        )

    @property
    def codeblock_script(self) -> str | None:
        return self.scripts.get(CODEBLOCK_SCRIPT)


def check_assets_versions(tool_info: Mapping[Language, ToolInfo]) -> None:
    """Fail when the R and Python tools support different assets versions."""
    r_info = tool_info.get(Language.R)
    python_info = tool_info.get(Language.PYTHON)
    if r_info is None or python_info is None:
        return
    if r_info.assets_version == python_info.assets_version:
        return
    raise AssetsVersionMismatchError(
        "The shinylive R and Python packages must support the same Shinylive Assets "
        "version to be used in the same document."
        "\nR"
        f"\n\tShinylive package version: {r_info.version}"
        f"\n\tSupported assets version: {r_info.assets_version}"
        "\nPython"
        f"\n\tShinylive package version: {python_info.version}"
        f"\n\tSupported assets version: {python_info.assets_version}"
    )


__all__ = ["CODEBLOCK_SCRIPT", "ToolInfo", "check_assets_versions"]
