"""Configuration model for the shinylive filter.

ShinyliveConfig

`project_offset` (`str | None`)
: Relative path from the current page to the root of the site. Forwarded to
  `extension base-htmldeps --sw-dir` so the service worker can be located.
  Documents rendered outside a project leave it unset, which aborts the build
  as soon as a shinylive block is found.

`quarto_executable` (`str`)
: Command used to run the `codeblock-to-json` conversion script.

`dependency_name` (`str`)
: Name of the HTML dependency that language and app resources are attached to.

`stylesheet` (`str`)
: Stylesheet registered alongside the base dependencies.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


STYLESHEET_DEPENDENCY_NAME = "shinylive-quarto-css"


class ShinyliveConfig(BaseModel):
    """Options controlling how shinylive blocks are resolved."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    project_offset: str | None = None
    quarto_executable: str = Field(default="quarto", min_length=1)
    dependency_name: str = Field(default="shinylive", min_length=1)
    stylesheet: str = "resources/css/shinylive-quarto.css"

    @field_validator("project_offset")
    @classmethod
    def _blank_offset_is_missing(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    def stylesheet_dependency(self) -> dict[str, object]:
        """Return the stylesheet dependency registered once per document."""
        return {"name": STYLESHEET_DEPENDENCY_NAME, "stylesheets": [self.stylesheet]}


__all__ = ["STYLESHEET_DEPENDENCY_NAME", "ShinyliveConfig"]
