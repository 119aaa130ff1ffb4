from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel


class RelayStatus(str, Enum):
    SUCCESS = "Success"
    PARTIAL_SUCCESS = "Partial Success"
    FAILED = "Failed"


class BatchStatus(str, Enum):
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class NotificationData(BaseModel):
    """Content of a push notification"""
    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    data: Any = None


class NotificationRequest(BaseModel):
    """A single notification addressed to one device token"""
    model_config = ConfigDict(frozen=True)

    token: str = Field(..., min_length=1)
    notificationData: NotificationData


class RelayEvent(RootModel[List[List[Any]]]):
    """Invocation payload: a list of batches, each a list of raw notification requests.

    Items are kept raw here so that a single malformed request fails on its own
    instead of rejecting the whole event.
    """


class NotificationOutcome(BaseModel):
    """Result of one delivery attempt"""
    model_config = ConfigDict(frozen=True)

    success: bool
    response: Any = None
    error: Optional[str] = None


class BatchSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    successes: int = Field(0, ge=0)
    failures: int = Field(0, ge=0)


class BatchResult(BaseModel):
    """Per-batch diagnostic entry returned to the caller"""
    status: BatchStatus
    successes: int = 0
    failures: int = 0
    error: Optional[str] = None


class RelayResult(BaseModel):
    """Overall result of one invocation.

    Only the fields relevant to ``status`` are populated; serialize with
    ``to_response()`` to drop the others.
    """
    status: RelayStatus
    totalNotificationsSent: Optional[int] = None
    totalSuccesses: Optional[int] = None
    totalFailures: Optional[int] = None
    batchResults: Optional[List[BatchResult]] = None
    error: Optional[str] = None

    def to_response(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
