"""Configuration for the Jest runner."""

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field


class JestConfig(BaseModel):
    """Configuration for the Jest runner.

    Jest only reports test locations when asked to, so
    ``test_location_in_results`` is on unless locations are unwanted.
    """

    command: Sequence[str] = ("npx", "jest")
    extra_args: Sequence[str] = ()
    env: Mapping[str, str] = Field(default_factory=dict)
    test_location_in_results: bool = True
