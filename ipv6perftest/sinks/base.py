"""Abstract base class for result sinks."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from ipv6perftest.models.record import ResultRecord


@dataclass(frozen=True, kw_only=True)
class SubmissionResult:
    """Outcome of delivering a record to one sink."""

    sink: str
    status: Literal["success", "failure"]
    message: str | None = None
    url: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResultSink(ABC):
    """Abstract base for destinations of result records.

    Implementations raise on failure; the caller converts exceptions into
    failed submissions so one sink never prevents the others from running.
    """

    @abstractmethod
    async def submit(self, record: ResultRecord) -> str | None:
        """Deliver a record.

        Args:
            record: Assembled result record

        Returns:
            URL of the created artifact (issue, pull request, job), if any

        Raises:
            RuntimeError: If the destination rejected the record

        """
