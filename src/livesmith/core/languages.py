"""Supported shinylive languages and their external tool bindings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from .exceptions import UnknownLanguageError


class Language(str, Enum):
    """Source languages that can back a shinylive application."""

    PYTHON = "python"
    R = "r"

    @classmethod
    def coerce(cls, value: Language | str) -> Language:
        """Return the matching language or raise for unsupported tokens."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise UnknownLanguageError(f"Unknown language: {value}") from exc


@dataclass(frozen=True, slots=True)
class LanguageBinding:
    """Static description of how a language is dispatched."""

    executable: str
    base_args: tuple[str, ...]
    install_hint: str
    source_tag: str
    canonical_class: str


LANGUAGE_BINDINGS: Mapping[Language, LanguageBinding] = {
    Language.R: LanguageBinding(
        executable="Rscript",
        base_args=("-e", "shinylive:::quarto_ext()"),
        install_hint=(
            "Error running 'Rscript' command. "
            "Perhaps you need to install the 'shinylive' R package?"
        ),
        source_tag="{shinylive-r}",
        canonical_class="shinylive-r",
    ),
    Language.PYTHON: LanguageBinding(
        executable="shinylive",
        base_args=(),
        install_hint=(
            "Error running 'shinylive' command. "
            "Perhaps you need to install the 'shinylive' Python package?"
        ),
        source_tag="{shinylive-python}",
        canonical_class="shinylive-python",
    ),
}


def binding_for(language: Language | str) -> LanguageBinding:
    """Return the tool binding registered for ``language``."""
    return LANGUAGE_BINDINGS[Language.coerce(language)]


def classify_classes(classes: Iterable[str]) -> Language | None:
    """Return the language whose source tag appears in ``classes``."""
    present = set(classes)
    for language, binding in LANGUAGE_BINDINGS.items():
        if binding.source_tag in present:
            return language
    return None


__all__ = [
    "LANGUAGE_BINDINGS",
    "Language",
    "LanguageBinding",
    "binding_for",
    "classify_classes",
]
