"""Client for the reply generation endpoint, shared by both surfaces."""

import json
import logging
from typing import Optional

import httpx

from models import GenerationRequest
from .exceptions import RequestFailed

logger = logging.getLogger(__name__)


class ReplyRequester:
    """Sends one generation request per call to a fixed endpoint.

    Requests are never retried or deduplicated; callers guard against
    overlapping activations themselves.

    Example usage:
        requester = ReplyRequester("http://localhost:8080/api/email/generate")
        reply = await requester.generate(GenerationRequest(email_content="Hi"))
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            endpoint: URL of the generation endpoint.
            timeout: Seconds before the request is abandoned.
            transport: Optional httpx transport, used by tests to stub the endpoint.
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    async def generate(self, request: GenerationRequest) -> str:
        """POST the request and return the raw response body.

        Raises:
            RequestFailed: Non-2xx status, timeout, network failure or a
                malformed endpoint URL.
        """
        payload = request.to_payload()
        logger.debug("POST %s tone=%r", self.endpoint, payload["tone"])
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(self.endpoint, json=payload)
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Generation endpoint answered %s", status)
            raise RequestFailed(f"API Request Failed ({status})", status_code=status) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Generation endpoint unreachable: %s", e)
            raise RequestFailed(f"API Request Failed: {e}") from e
        return r.text


def to_display_text(body: str) -> str:
    """Turn a response body into the string shown in the form output.

    A JSON string body is unwrapped, other JSON values are re-serialized
    compactly and anything that is not JSON is shown as-is.
    """
    try:
        data = json.loads(body)
    except ValueError:
        return body
    if isinstance(data, str):
        return data
    return json.dumps(data, separators=(",", ":"))
