"""
Push ticket and receipt models.

Tickets acknowledge that a message was accepted or rejected when it was sent.
Receipts report the delivery outcome later, keyed by ticket id.
Both are tagged unions on the "status" field: "ok" or "error".
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import ConfigDict

from expo_push.core.enums import ErrorCodeField
from expo_push.core.message import WireModel


STATUS_OK = "ok"
STATUS_ERROR = "error"


class PushErrorDetails(WireModel):
    """
    Structured details attached to an error ticket or receipt.

    Attributes:
        error: Machine-readable error code
        expo_push_token: The token the error refers to
    """

    model_config = ConfigDict(extra="allow")

    error: Optional[ErrorCodeField] = None
    expo_push_token: Optional[str] = None


class _StatusMixin:
    """Status helpers shared by ticket and receipt variants."""

    @property
    def is_success(self) -> bool:
        return self.status == STATUS_OK

    @property
    def is_error(self) -> bool:
        return self.status == STATUS_ERROR


class PushSuccessTicket(_StatusMixin, WireModel):
    """A message accepted for delivery; `id` is used to fetch its receipt."""

    status: Literal["ok"] = STATUS_OK
    id: str


class PushErrorTicket(_StatusMixin, WireModel):
    """A message rejected before delivery."""

    status: Literal["error"] = STATUS_ERROR
    message: str
    details: Optional[PushErrorDetails] = None


class PushSuccessReceipt(_StatusMixin, WireModel):
    """A message delivered to the platform provider."""

    model_config = ConfigDict(extra="allow")

    status: Literal["ok"] = STATUS_OK
    details: Optional[Dict[str, Any]] = None


class PushErrorReceipt(_StatusMixin, WireModel):
    """A message the platform provider failed to deliver."""

    status: Literal["error"] = STATUS_ERROR
    message: str
    details: Optional[PushErrorDetails] = None


PushTicket = Union[PushSuccessTicket, PushErrorTicket]
PushReceipt = Union[PushSuccessReceipt, PushErrorReceipt]
