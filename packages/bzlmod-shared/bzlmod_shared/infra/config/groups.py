"""
Config group definitions.

Settings are split into logical groups. Each group is usable on its own and
is assembled by Settings.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ManifestConfig(BaseModel):
    """MODULE.bazel fragment lookup."""

    root_manifest: str = Field(
        default="MODULE.bazel",
        min_length=1,
        description="Repo-relative path of the root module file",
    )
    encoding: str = Field(default="utf-8", description="Encoding of manifest fragments on disk")


class ObservabilityConfig(BaseModel):
    """Structured logging."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["console", "json"] = Field(default="console", description="Log renderer")
    include_caller: bool = Field(default=False, description="Attach file/line/function to events")
