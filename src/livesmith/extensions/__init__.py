"""Markdown extensions bundled with livesmith."""

from __future__ import annotations

from .shinylive import ShinyliveExtension, render_code_block


__all__ = ["ShinyliveExtension", "render_code_block"]
