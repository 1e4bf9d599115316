"""
Expo Push Client

An asynchronous client for the Expo push notification service.
Messages are split into chunks that respect the per-request limits, sent with
bounded concurrency, and rate-limited requests are retried with exponential backoff.
"""

__version__ = "0.1.0"

from expo_push.client.expo import ExpoClient
from expo_push.config import ClientConfig
from expo_push.core.enums import InterruptionLevel, PushErrorCode, PushPriority
from expo_push.core.message import PushMessage, PushRichContent, PushSound
from expo_push.core.ticket import (
    PushErrorDetails,
    PushErrorReceipt,
    PushErrorTicket,
    PushReceipt,
    PushSuccessReceipt,
    PushSuccessTicket,
    PushTicket,
)
from expo_push.core.token import is_expo_push_token
from expo_push.exceptions import ApiError, DecodeError, ExpoError

__all__ = [
    "ExpoClient",
    "ClientConfig",
    "PushMessage",
    "PushSound",
    "PushRichContent",
    "PushPriority",
    "InterruptionLevel",
    "PushErrorCode",
    "PushTicket",
    "PushSuccessTicket",
    "PushErrorTicket",
    "PushReceipt",
    "PushSuccessReceipt",
    "PushErrorReceipt",
    "PushErrorDetails",
    "is_expo_push_token",
    "ExpoError",
    "ApiError",
    "DecodeError",
]
