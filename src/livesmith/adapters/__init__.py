"""Adapters connecting the shinylive core to subprocesses and Markdown."""
