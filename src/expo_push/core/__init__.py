"""
Core push notification models.

This module contains the message, ticket and receipt models, the tagged
union codec used to decode API responses, and push token validation.
"""

from expo_push.core.codec import RECEIPT_CODEC, TICKET_CODEC, TaggedUnionCodec
from expo_push.core.message import PushMessage
from expo_push.core.ticket import PushReceipt, PushTicket
from expo_push.core.token import is_expo_push_token

__all__ = [
    "PushMessage",
    "PushTicket",
    "PushReceipt",
    "TaggedUnionCodec",
    "TICKET_CODEC",
    "RECEIPT_CODEC",
    "is_expo_push_token",
]
