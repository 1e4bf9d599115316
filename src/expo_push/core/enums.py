"""
Enumerations used in push messages, tickets and receipts.

Wire values are the symbol names split into words, lowercased and joined by
hyphens ("TimeSensitive" -> "time-sensitive"). Parsing is case-insensitive and
also accepts the symbol name in any case ("TimeSensitive", "TIMESENSITIVE").
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator


class KebabCaseEnum(str, Enum):
    """String enum whose values use the hyphenated wire form."""

    @property
    def symbol_name(self) -> str:
        """PascalCase symbol name, e.g. "DeviceNotRegistered"."""
        return self.name.title().replace("_", "")

    @classmethod
    def parse(cls, value: Any) -> "KebabCaseEnum":
        """
        Parse a wire value into an enum member.

        Args:
            value: Wire value ("time-sensitive", "TIME-SENSITIVE") or
                symbol name ("TimeSensitive", "timesensitive")

        Returns:
            Matching enum member

        Raises:
            ValueError: If the value matches no member
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if lowered == member.value or lowered == member.symbol_name.lower():
                    return member
        raise ValueError(f'Unable to convert "{value}" to {cls.__name__}.')

    @classmethod
    def _missing_(cls, value: Any) -> "KebabCaseEnum":
        return cls.parse(value)

    def __str__(self) -> str:
        return self.value


class PushPriority(KebabCaseEnum):
    """Delivery priority of a push message."""
    DEFAULT = "default"
    NORMAL = "normal"
    HIGH = "high"


class InterruptionLevel(KebabCaseEnum):
    """iOS interruption level of a push message."""
    PASSIVE = "passive"
    ACTIVE = "active"
    TIME_SENSITIVE = "time-sensitive"
    CRITICAL = "critical"


class PushErrorCode(KebabCaseEnum):
    """Error codes reported in ticket and receipt details."""
    DEVICE_NOT_REGISTERED = "device-not-registered"
    MESSAGE_TOO_BIG = "message-too-big"
    MESSAGE_RATE_EXCEEDED = "message-rate-exceeded"
    INVALID_CREDENTIALS = "invalid-credentials"
    EXPO_ERROR = "expo-error"
    PROVIDER_ERROR = "provider-error"
    DEVELOPER_ERROR = "developer-error"


def _parser(enum_cls):
    def parse(value: Any) -> Any:
        if value is None:
            return value
        return enum_cls.parse(value)
    return BeforeValidator(parse)


PriorityField = Annotated[PushPriority, _parser(PushPriority)]
InterruptionLevelField = Annotated[InterruptionLevel, _parser(InterruptionLevel)]
ErrorCodeField = Annotated[PushErrorCode, _parser(PushErrorCode)]
