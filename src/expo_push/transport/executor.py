"""
Request executor for the Expo push API.

Performs one HTTP attempt per call and maps the response to typed results
or classified errors. Retries are the dispatcher's job.
"""

import gzip
import json
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

import httpx
import structlog

from expo_push import __version__
from expo_push.config import (
    COMPRESSION_THRESHOLD_BYTES,
    GET_PUSH_NOTIFICATION_RECEIPTS_PATH,
    SEND_PUSH_NOTIFICATIONS_PATH,
    ClientConfig,
    get_config,
)
from expo_push.core.codec import RECEIPT_CODEC, TICKET_CODEC
from expo_push.core.message import PushMessage
from expo_push.core.ticket import PushReceipt, PushTicket
from expo_push.engine.chunker import count_slots
from expo_push.exceptions import (
    RATE_LIMIT_STATUS,
    ApiError,
    DecodeError,
    RequestTimeoutError,
    TransportError,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

USER_AGENT = f"expo-push-client-python/{__version__}"

# Decodes the envelope's data field given (data, status_code, response_text)
Decoder = Callable[[Any, int, str], T]


class RequestExecutor:
    """
    Executes single requests against the Expo push API.

    The HTTP client is owned by the caller; the executor only sends requests
    through it and never closes it.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: Optional[ClientConfig] = None,
    ):
        """
        Initialize the executor.

        Args:
            client: HTTP client used for requests
            config: Client configuration. Uses global config if not provided.
        """
        self.config = config or get_config()
        self._client = client

    @property
    def headers(self) -> Dict[str, str]:
        """Get request headers, with the access token when configured."""
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
        }
        if self.config.access_token:
            headers["Authorization"] = f"Bearer {self.config.access_token}"
        return headers

    def encode_body(self, payload: Any) -> Tuple[bytes, Dict[str, str]]:
        """
        Serialize a request payload, compressing it when large.

        Args:
            payload: JSON-compatible payload

        Returns:
            Tuple of (body bytes, headers for this request)
        """
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        headers = self.headers

        if len(body) > COMPRESSION_THRESHOLD_BYTES:
            body = gzip.compress(body)
            headers["Content-Encoding"] = "gzip"

        return body, headers

    async def execute(self, path: str, payload: Any, decode: Decoder) -> T:
        """
        Send one POST request and decode its data field.

        Args:
            path: API path relative to the base URL
            payload: JSON-compatible request body
            decode: Function converting the data field into the result

        Returns:
            Decoded result

        Raises:
            ApiError: If the API reports a failure or the envelope is malformed
            DecodeError: If the data does not match the expected schema
            TransportError: If the request could not be completed
        """
        body, headers = self.encode_body(payload)
        url = self.config.url_for(path)

        try:
            response = await self._client.post(
                url,
                content=body,
                headers=headers,
                timeout=self.config.attempt_timeout,
            )
        except httpx.TimeoutException as e:
            logger.error("expo_request_timeout", path=path, error=str(e))
            raise RequestTimeoutError(f"Expo request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.error("expo_request_error", path=path, error=str(e))
            raise TransportError(f"Expo request failed: {e}") from e

        status_code = response.status_code
        response_text = response.text

        envelope = self.check_response(status_code, response_text)

        data = envelope.get("data")
        if data is None:
            raise ApiError(
                "Expo API response missing data field",
                status_code,
                response_text=response_text,
            )

        try:
            return decode(data, status_code, response_text)
        except DecodeError as e:
            logger.error("expo_response_decode_failed", path=path, error=str(e))
            raise DecodeError(
                str(e),
                status_code=status_code,
                response_text=response_text,
            ) from e

    def check_response(self, status_code: int, response_text: str) -> Dict[str, Any]:
        """
        Raise for failed responses and return the parsed envelope otherwise.

        Expo reports some failures with a 2xx status and an "errors" list.
        """
        if 200 <= status_code < 300:
            envelope = _parse_envelope(response_text)
            if envelope is None:
                raise ApiError(
                    "Expo responded with malformed JSON",
                    status_code,
                    response_text=response_text,
                )

            errors = _error_list(envelope)
            if errors:
                primary = _api_error(errors[0], status_code, response_text)
                primary.other_errors = [
                    _api_error(error, status_code) for error in errors[1:]
                ]
                logger.error(
                    "expo_api_error",
                    status=status_code,
                    error_code=primary.error_code,
                    error=primary.message,
                    error_count=len(errors),
                )
                raise primary

            return envelope

        if status_code == RATE_LIMIT_STATUS:
            logger.warning("expo_rate_limited", status=status_code)
            raise ApiError(
                "Rate limited by Expo API",
                status_code,
                response_text=response_text,
            )

        logger.error(
            "expo_request_failed",
            status=status_code,
            error=response_text[:200],
        )

        envelope = _parse_envelope(response_text)
        errors = _error_list(envelope) if envelope is not None else []
        if errors:
            raise _api_error(errors[0], status_code, response_text)

        raise ApiError(
            f"Expo API returned status code {status_code}",
            status_code,
            response_text=response_text,
        )

    async def send_messages(self, messages: Sequence[PushMessage]) -> List[PushTicket]:
        """
        Send one chunk of messages.

        Returns:
            One ticket per recipient slot, in input order
        """
        expected_count = count_slots(messages)
        payload = [message.to_wire() for message in messages]

        def decode(data: Any, status_code: int, response_text: str) -> List[PushTicket]:
            if not isinstance(data, list):
                raise ApiError(
                    "Expected Expo to respond with a list of push tickets "
                    "but received data of another type",
                    status_code,
                    response_text=response_text,
                )

            tickets = TICKET_CODEC.decode_list(data)
            if len(tickets) != expected_count:
                raise ApiError(
                    f"Expected Expo to respond with {expected_count} tickets "
                    f"but got {len(tickets)}",
                    status_code,
                    response_text=response_text,
                )
            return tickets

        tickets = await self.execute(SEND_PUSH_NOTIFICATIONS_PATH, payload, decode)
        logger.info("push_chunk_sent", messages=len(messages), tickets=len(tickets))
        return tickets

    async def fetch_receipts(self, receipt_ids: Sequence[str]) -> Dict[str, PushReceipt]:
        """
        Fetch receipts for one chunk of receipt ids.

        Returns:
            Receipts keyed by id; ids without a receipt yet are absent
        """
        payload = {"ids": list(receipt_ids)}

        def decode(data: Any, status_code: int, response_text: str) -> Dict[str, PushReceipt]:
            if not isinstance(data, dict):
                raise ApiError(
                    "Expected Expo to respond with a map from receipt IDs to "
                    "receipts but received data of another type",
                    status_code,
                    response_text=response_text,
                )
            return RECEIPT_CODEC.decode_map(data)

        receipts = await self.execute(GET_PUSH_NOTIFICATION_RECEIPTS_PATH, payload, decode)
        logger.info("receipt_chunk_fetched", requested=len(receipt_ids), received=len(receipts))
        return receipts


def _parse_envelope(response_text: str) -> Optional[Dict[str, Any]]:
    """Parse a response body, returning None unless it is a JSON object."""
    try:
        envelope = json.loads(response_text)
    except ValueError:
        return None
    return envelope if isinstance(envelope, dict) else None


def _error_list(envelope: Dict[str, Any]) -> List[Dict[str, Any]]:
    errors = envelope.get("errors")
    if not isinstance(errors, list):
        return []
    return [error for error in errors if isinstance(error, dict)]


def _api_error(
    error: Dict[str, Any],
    status_code: int,
    response_text: Optional[str] = None,
) -> ApiError:
    """Build an ApiError from one entry of an "errors" list."""
    return ApiError(
        error.get("message") or "Unknown Expo API error",
        status_code,
        error_code=error.get("code"),
        error_data=error.get("details"),
        response_text=response_text,
    )
