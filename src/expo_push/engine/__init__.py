"""
Request engine - chunking and dispatch.
"""

from expo_push.engine.chunker import chunk_push_notifications, chunk_receipt_ids
from expo_push.engine.dispatcher import RetryingDispatcher

__all__ = ["chunk_push_notifications", "chunk_receipt_ids", "RetryingDispatcher"]
