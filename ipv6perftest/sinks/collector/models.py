"""Pydantic models for collector API responses."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CollectorResponse(BaseModel):
    """Acknowledgement returned by the collector."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    job_id: str | None = None
    message: str | None = None
    workflow_url: str | None = None
