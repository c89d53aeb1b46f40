"""Configuration for the GitHub CLI sink."""

from typing import Literal

from pydantic import BaseModel, Field


class GhCliConfig(BaseModel):
    """Configuration for the GitHub CLI sink.

    ``issue`` opens an issue with the record in its body; ``pr`` commits the
    record as a JSON file on a new branch and opens a pull request.
    """

    repo: str = Field(..., pattern=r"^[\w.-]+/[\w.-]+$", description="owner/repo")
    method: Literal["issue", "pr"] = "issue"
