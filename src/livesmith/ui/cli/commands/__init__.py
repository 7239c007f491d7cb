"""CLI command implementations exposed via `livesmith.ui.cli`."""

from __future__ import annotations

from .info import info
from .render import render


__all__ = ["info", "render"]
