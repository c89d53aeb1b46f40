"""Configuration for the remote collector sink."""

from pydantic import BaseModel, Field, SecretStr

from ipv6perftest.config import DEFAULT_COLLECTOR_URL


class CollectorConfig(BaseModel):
    """Configuration for the remote collector sink."""

    token: SecretStr
    url: str = DEFAULT_COLLECTOR_URL
    timeout: float = Field(default=30.0, gt=0)
