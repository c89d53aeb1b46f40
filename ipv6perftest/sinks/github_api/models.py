"""Pydantic models for GitHub issues API responses."""

from pydantic import BaseModel


class Issue(BaseModel):
    """An issue created through the GitHub API."""

    number: int
    html_url: str
