"""Amplify: Resend Delivery Client.

Sends one rendered email per call. No batching and no retries: a failed send
is reported to the caller as DeliveryError.
"""

from typing import Any, Dict, Optional

import httpx

from amplify.core.errors import DeliveryError
from amplify.core.logging import get_logger

logger = get_logger("resend.client")


class ResendClient:
    """Async HTTP client for the Resend transactional email API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.resend.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def send(self, sender: str, to: str, subject: str, html: str) -> Dict[str, Any]:
        """Send a single email and return the provider's ``{"id": ...}`` receipt."""
        client = await self._get_client()
        payload = {"from": sender, "to": [to], "subject": subject, "html": html}

        try:
            resp = await client.post("/emails", json=payload)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = _json_body(e.response)
            error_msg = body.get("message", str(e))
            logger.warning(
                f"Resend rejected email to {to}: {error_msg}",
                extra={"status_code": e.response.status_code},
            )
            raise DeliveryError(error_msg, e.response.status_code, body) from e
        except httpx.RequestError as e:
            logger.warning(f"Resend request failed for {to}: {e}")
            raise DeliveryError(f"Connection to Resend failed: {e}") from e

        try:
            receipt = resp.json()
        except ValueError as e:
            raise DeliveryError(
                "Resend returned a non-JSON receipt", resp.status_code, resp.text
            ) from e
        if not isinstance(receipt, dict):
            raise DeliveryError("Resend returned a malformed receipt", resp.status_code, receipt)
        logger.debug(f"Email accepted by Resend: {receipt.get('id')}")
        return receipt


def _json_body(response: httpx.Response) -> Dict[str, Any]:
    """Error body as a dict; {} when it is not a JSON object."""
    if not response.headers.get("content-type", "").startswith("application/json"):
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
