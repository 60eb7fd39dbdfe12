"""Pydantic models for render configuration."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class RenderOptions(BaseModel):
    """Options shared by the element and string materializers."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    strict_attributes: bool = Field(
        True,
        alias="strictAttributes",
        description=(
            "Reject non-string literal attribute values. When false, the value is "
            "coerced to a string and a warning is written to stderr."
        ),
    )
    quote_escape: Literal["entity", "backslash"] = Field(
        "entity",
        alias="quoteEscape",
        description=(
            "How double quotes in attribute values are escaped: 'entity' emits &quot; "
            "(parses back to the original value), 'backslash' emits the legacy \\\"."
        ),
    )
    escape_text: bool = Field(
        True,
        alias="escapeText",
        description="Escape &, < and > in text nodes of the HTML string output.",
    )


DEFAULT_OPTIONS = RenderOptions()


def load_options(path: Path) -> RenderOptions:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise SystemExit(f"{path} must contain a mapping of render options.")
    try:
        return RenderOptions.model_validate(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid render options in {path}: {exc}") from exc
