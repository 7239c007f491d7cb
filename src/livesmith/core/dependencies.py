"""Deduplicated registration of HTML dependencies with the document host."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
import json
import logging
from typing import Any


logger = logging.getLogger(__name__)


def dependency_key(payload: Mapping[str, Any]) -> str:
    """Return the identity key used to deduplicate ``payload``."""
    name = payload.get("name")
    if isinstance(name, str) and name:
        return name
    return json.dumps(payload, sort_keys=True, default=str)


class DependencyAccumulator:
    """Track dependencies already attached to the host during one build."""

    def __init__(self) -> None:
        self._registered: set[str] = set()

    def register_once(
        self,
        identity_key: str,
        payload: Mapping[str, Any],
        register: Callable[[Mapping[str, Any]], None],
    ) -> bool:
        """Invoke ``register`` unless ``identity_key`` was seen before.

        Returns ``True`` when the host was called.
        """
        if identity_key in self._registered:
            logger.debug("Dependency '%s' already registered; skipping", identity_key)
            return False
        register(payload)
        self._registered.add(identity_key)
        return True

    def __contains__(self, identity_key: object) -> bool:
        return identity_key in self._registered

    def __len__(self) -> int:
        return len(self._registered)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._registered))


__all__ = ["DependencyAccumulator", "dependency_key"]
