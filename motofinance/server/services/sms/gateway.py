"""
SMS Gateways.

A gateway takes a phone number and a text and either delivers it or raises
``SmsGatewayError``. Delivery is attempted once; nothing is retried.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from motofinance.core.errors import SmsGatewayError
from motofinance.core.logging_config import get_logger
from motofinance.server.core.config import SmsGatewayConfig

logger = get_logger(__name__)


class SmsGateway(ABC):
    """Outgoing SMS channel."""

    @abstractmethod
    async def send(self, recipient_phone: str, message: str) -> None:
        """
        Hand one message to the provider.

        Raises:
            SmsGatewayError: If the provider did not accept the message.
        """


class LoggingSmsGateway(SmsGateway):
    """Gateway used when no provider is configured: every message is logged and counts as sent."""

    async def send(self, recipient_phone: str, message: str) -> None:
        logger.info(f"SMS to {recipient_phone}: {message}")


class HttpSmsGateway(SmsGateway):
    """
    Gateway that POSTs each message as JSON to an HTTP SMS provider.

    The body is ``{"to": ..., "message": ..., "sender_id": ...}`` and the API
    key is sent as a bearer token. Any non-2xx answer or transport error is a
    failed delivery.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        sender_id: str = "MOTOFINANCE",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self.api_key = api_key
        self.sender_id = sender_id
        self.timeout = timeout
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def send(self, recipient_phone: str, message: str) -> None:
        payload = {"to": recipient_phone, "message": message, "sender_id": self.sender_id}
        try:
            if self._client is not None:
                response = await self._client.post(self.url, json=payload, headers=self._headers())
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.url, json=payload, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SmsGatewayError(recipient_phone, f"gateway answered {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SmsGatewayError(recipient_phone, str(e) or type(e).__name__) from e
        logger.debug(f"SMS to {recipient_phone} accepted by {self.url}")


def build_gateway(config: SmsGatewayConfig) -> SmsGateway:
    """Pick the HTTP gateway when a URL is configured, the logging gateway otherwise."""
    if config.url:
        return HttpSmsGateway(
            url=config.url,
            api_key=config.api_key,
            sender_id=config.sender_id,
            timeout=config.timeout,
        )
    return LoggingSmsGateway()
