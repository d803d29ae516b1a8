"""Thin async client for the SendForSign REST API.

Every call is a single POST; there is no retry, caching or pooling beyond what
httpx does inside one AsyncClient.
"""
import json
import logging
from typing import Any, Optional

import httpx

from core.config import ServerConfig
from core.errors import BackendError
from utils import get_endpoint  # type: ignore

logger = logging.getLogger(__name__)

RESOURCES = ("template", "placeholder", "contract")


class SendForSignClient:
    def __init__(self, config: ServerConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    async def call(self, api_key: str, resource: str, body: dict[str, Any]) -> Any:
        """POST `body` to the resource endpoint and return the decoded JSON response.

        Raises BackendError on a non-2xx status, a transport failure or a body
        that is not JSON.
        """
        if resource not in RESOURCES:
            raise ValueError(f"Unknown SendForSign resource: {resource}")
        url = get_endpoint(self.config, resource)
        headers = {
            "X-Sendforsign-Key": api_key,
            "Content-Type": "application/json",
        }
        content = json.dumps(body, ensure_ascii=False).encode("utf-8")

        async with httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport) as client:
            try:
                resp = await client.post(url, headers=headers, content=content)
            except httpx.HTTPError as e:
                logger.warning(f"Request to {url} failed: {e}")
                raise BackendError(f"SendForSign request failed: {e}") from e

        if not resp.is_success:
            logger.warning(f"SendForSign {resource} call returned HTTP {resp.status_code}")
            raise BackendError.from_status(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as e:
            logger.warning(f"Failed to decode JSON from {url}: {e}")
            raise BackendError(
                f"SendForSign returned a non-JSON response (HTTP {resp.status_code}): {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            ) from e


def as_text(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
