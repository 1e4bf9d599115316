"""
Push client layer.

Provides the abstract client interface and the Expo implementation.
"""

from expo_push.client.interface import PushClientInterface
from expo_push.client.expo import ExpoClient

__all__ = [
    "PushClientInterface",
    "ExpoClient",
]
