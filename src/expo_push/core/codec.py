"""
Tagged union codec.

Decodes JSON values into one of a fixed set of pydantic models selected by a
discriminator property, and encodes variants back to their wire shape.
"""

from typing import Any, Dict, Generic, List, Mapping, Type, TypeVar

from pydantic import ValidationError

from expo_push.core.message import WireModel
from expo_push.core.ticket import (
    STATUS_ERROR,
    STATUS_OK,
    PushErrorReceipt,
    PushErrorTicket,
    PushReceipt,
    PushSuccessReceipt,
    PushSuccessTicket,
    PushTicket,
)
from expo_push.exceptions import CodecError, DecodeError

T = TypeVar("T")


class TaggedUnionCodec(Generic[T]):
    """
    Codec for a discriminated union of wire models.

    Usage:
        ```python
        codec = TaggedUnionCodec(
            "PushTicket", "status",
            {"ok": PushSuccessTicket, "error": PushErrorTicket},
        )
        ticket = codec.decode({"status": "ok", "id": "r1"})
        ```
    """

    def __init__(
        self,
        name: str,
        discriminator: str,
        variants: Mapping[str, Type[WireModel]],
    ):
        """
        Initialize the codec.

        Args:
            name: Union name used in error messages
            discriminator: Wire property selecting the variant
            variants: Mapping of discriminator value to variant model
        """
        self.name = name
        self.discriminator = discriminator
        self.variants: Dict[str, Type[WireModel]] = dict(variants)
        self._tags = {model: tag for tag, model in self.variants.items()}

    def decode(self, value: Any) -> T:
        """
        Decode a JSON value into its variant.

        Args:
            value: Parsed JSON value

        Returns:
            Instance of the variant selected by the discriminator

        Raises:
            DecodeError: If the value is not an object, the discriminator is
                missing or unknown, or the fields do not match the variant
        """
        if not isinstance(value, dict):
            raise DecodeError(
                f"{self.name} must be a JSON object, got {type(value).__name__}."
            )

        if self.discriminator not in value:
            raise DecodeError(
                f"{self.name} must have a '{self.discriminator}' property."
            )

        tag = value[self.discriminator]
        variant = self.variants.get(tag) if isinstance(tag, str) else None
        if variant is None:
            raise DecodeError(f"Unknown {self.discriminator} value: {tag}")

        try:
            return variant.model_validate(value)
        except ValidationError as e:
            raise DecodeError(f"Invalid {self.name} ({self.discriminator}={tag}): {e}") from e

    def encode(self, value: T) -> Dict[str, Any]:
        """
        Encode a variant to its wire dictionary.

        Raises:
            CodecError: If the value is not a registered variant
        """
        if type(value) not in self._tags:
            raise CodecError(f"Unknown {self.name} type: {type(value).__name__}")
        return value.to_wire()

    def decode_list(self, values: List[Any]) -> List[T]:
        """Decode each element of a JSON array, preserving order."""
        return [self.decode(value) for value in values]

    def decode_map(self, values: Mapping[str, Any]) -> Dict[str, T]:
        """Decode each value of a JSON object, keeping its key."""
        return {key: self.decode(value) for key, value in values.items()}


TICKET_CODEC: TaggedUnionCodec[PushTicket] = TaggedUnionCodec(
    "PushTicket",
    "status",
    {STATUS_OK: PushSuccessTicket, STATUS_ERROR: PushErrorTicket},
)

RECEIPT_CODEC: TaggedUnionCodec[PushReceipt] = TaggedUnionCodec(
    "PushReceipt",
    "status",
    {STATUS_OK: PushSuccessReceipt, STATUS_ERROR: PushErrorReceipt},
)
