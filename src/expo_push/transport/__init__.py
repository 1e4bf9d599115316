"""
HTTP transport layer for the Expo push API.
"""

from expo_push.transport.executor import RequestExecutor

__all__ = ["RequestExecutor"]
