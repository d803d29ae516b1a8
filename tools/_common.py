"""Shared request cycle for the SendForSign tools: credentials, payload, one POST."""
import logging
from typing import Any

from core.arguments import ToolArguments  # type: ignore
from core.backend import SendForSignClient, as_text  # type: ignore
from core.config import ServerConfig  # type: ignore
from core.credentials import request_headers, resolve_credentials  # type: ignore
from core.payload import build_payload  # type: ignore

logger = logging.getLogger(__name__)


async def call_backend(
    config: ServerConfig,
    client: SendForSignClient,
    ctx: Any,
    args: ToolArguments,
    resource: str,
    action: str,
    **fields: Any,
) -> str:
    """Resolve credentials for this call, POST the payload and return the response as indented JSON text."""
    creds = resolve_credentials(config, headers=request_headers(ctx), client_key=args.client_key)
    logger.info(
        f"{args.tool}: {resource}/{action} "
        f"api_key={creds.api_key_source} client_key={creds.client_key_source}"
    )
    body = build_payload(action, creds.client_key, **fields)
    data = await client.call(creds.api_key, resource, body)
    return as_text(data)
