"""Configuration for the GitHub REST API sink."""

from collections.abc import Sequence

from pydantic import BaseModel, Field, SecretStr


class GitHubAPIConfig(BaseModel):
    """Configuration for the GitHub REST API sink."""

    token: SecretStr
    repo: str = Field(..., pattern=r"^[\w.-]+/[\w.-]+$", description="owner/repo")
    api_base_url: str = "https://api.github.com"
    labels: Sequence[str] = ("test-results", "automated")
