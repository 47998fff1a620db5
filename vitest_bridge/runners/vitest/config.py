"""Configuration for the Vitest runner."""

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field


class VitestConfig(BaseModel):
    """Configuration for the Vitest runner."""

    command: Sequence[str] = ("npx", "vitest")
    extra_args: Sequence[str] = ()
    env: Mapping[str, str] = Field(default_factory=dict)
