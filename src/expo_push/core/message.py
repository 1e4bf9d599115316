"""
Push message model.

Represents a single push notification request for one or more recipients.
"""

from typing import Annotated, Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from expo_push.core.enums import InterruptionLevelField, PriorityField


def _recipients_from_wire(value: Any) -> Any:
    """Accept a bare token string as a one-element recipient list."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, tuple):
        return list(value)
    return value


def _recipients_to_wire(value: List[str]) -> Union[str, List[str]]:
    """Write a single recipient as a bare string, several as an array."""
    if len(value) == 1:
        return value[0]
    return list(value)


Recipients = Annotated[
    List[str],
    BeforeValidator(_recipients_from_wire),
    PlainSerializer(_recipients_to_wire),
]


class WireModel(BaseModel):
    """Base model using camelCase wire names and omitting absent fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary using wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PushSound(WireModel):
    """
    Sound settings for iOS critical alerts.

    Attributes:
        critical: Whether the sound is a critical alert
        name: Sound file name, or "default"
        volume: Volume between 0 and 1 for critical alerts
    """

    critical: Optional[bool] = None
    name: Optional[str] = None
    volume: Optional[float] = None

    @classmethod
    def default(cls) -> "PushSound":
        """The system default sound."""
        return cls(name="default")


class PushRichContent(WireModel):
    """Rich content attached to a notification."""

    image: Optional[str] = None


class PushMessage(WireModel):
    """
    A push notification for one or more Expo push tokens.

    Each recipient consumes one slot of the per-request chunk limit.

    Attributes:
        to: Recipient push tokens
        data: Custom payload delivered to the app
        title: Notification title
        subtitle: iOS subtitle
        body: Notification body text
        sound: Sound name, or a PushSound for critical alerts
        ttl: Seconds the message may be redelivered
        expiration: Unix timestamp after which the message expires
        priority: Delivery priority
        interruption_level: iOS interruption level
        badge: iOS badge count
        channel_id: Android notification channel
        icon: Android notification icon
        rich_content: Rich content such as an image
        category_id: Notification category for actions
        mutable_content: Whether an iOS extension may modify the notification
    """

    to: Recipients
    data: Optional[Dict[str, Any]] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    body: Optional[str] = None
    sound: Optional[Union[str, PushSound]] = None
    ttl: Optional[int] = None
    expiration: Optional[int] = None
    priority: Optional[PriorityField] = None
    interruption_level: Optional[InterruptionLevelField] = None
    badge: Optional[int] = None
    channel_id: Optional[str] = None
    icon: Optional[str] = None
    rich_content: Optional[PushRichContent] = None
    category_id: Optional[str] = None
    mutable_content: Optional[bool] = None

    @classmethod
    def create(cls, to: Union[str, Iterable[str]], **fields: Any) -> "PushMessage":
        """
        Create a message for one token or several tokens.

        Args:
            to: A single push token or an iterable of tokens
            **fields: Remaining message fields

        Returns:
            New PushMessage instance
        """
        recipients = [to] if isinstance(to, str) else list(to)
        return cls(to=recipients, **fields)

    @property
    def slot_count(self) -> int:
        """Number of chunk slots this message consumes."""
        return len(self.to)

    def with_recipients(self, recipients: List[str]) -> "PushMessage":
        """Copy this message with a different recipient list."""
        return self.model_copy(update={"to": list(recipients)})

    def __repr__(self) -> str:
        return f"PushMessage(recipients={self.slot_count}, title={self.title!r})"
