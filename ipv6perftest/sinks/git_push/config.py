"""Configuration for the direct git push sink."""

from pydantic import BaseModel


class GitPushConfig(BaseModel):
    """Configuration for the direct git push sink.

    The repository URL must be pushable with the credentials already
    available to git (SSH agent, credential helper, or a local path).
    """

    repo_url: str
    branch: str = "main"
