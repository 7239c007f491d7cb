"""Subprocess wrappers used to talk to the shinylive command line tools."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import shutil
import subprocess

from livesmith.core.diagnostics import DiagnosticEmitter, NullEmitter
from livesmith.core.exceptions import ToolExecutionError, ToolNotFoundError
from livesmith.core.languages import Language, binding_for


logger = logging.getLogger(__name__)


def pipe(
    command: str,
    arguments: Sequence[str] = (),
    input_payload: str | None = None,
    *,
    hint: str | None = None,
) -> str:
    """Run ``command`` with ``input_payload`` piped to stdin and return stdout."""
    executable = shutil.which(command) or command
    argv = [executable, *arguments]
    logger.debug("Running %s", " ".join(argv))
    try:
        result = subprocess.run(
            argv,
            input=input_payload or "",
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(f"Command '{command}' could not be located.", hint=hint) from exc
    except OSError as exc:
        raise ToolNotFoundError(f"Failed to invoke '{command}': {exc}", hint=hint) from exc
    except UnicodeDecodeError as exc:
        raise ToolExecutionError(
            f"Command '{command}' produced output that is not valid UTF-8: {exc}", hint=hint
        ) from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        stdout = (result.stdout or "").strip()
        detail = stderr or stdout
        message = f"Command '{command}' failed with exit code {result.returncode}"
        if detail:
            message = f"{message}: {detail}"
        raise ToolExecutionError(message, hint=hint)

    return result.stdout or ""


class ToolInvoker:
    """Dispatch ``extension`` requests to the tool bound to each language."""

    def __init__(self, emitter: DiagnosticEmitter | None = None) -> None:
        self._emitter = emitter or NullEmitter()

    def invoke(
        self,
        language: Language | str,
        arguments: Sequence[str],
        input_payload: str | None = None,
    ) -> str:
        """Run the language's tool and return its raw standard output."""
        language = Language.coerce(language)
        binding = binding_for(language)
        self._emitter.event(
            "tool_invoke",
            {"language": language.value, "arguments": list(arguments)},
        )
        return pipe(
            binding.executable,
            [*binding.base_args, *arguments],
            input_payload,
            hint=binding.install_hint,
        )


__all__ = ["ToolInvoker", "pipe"]
