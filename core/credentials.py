"""Resolve the (api key, client key) pair used for a SendForSign call.

Precedence:
    api key:    inbound header > SFS_API_KEY
    client key: inbound header > per-call argument > SFS_CLIENT_KEY

Which sources are consulted depends on the transport: the stdio transport has no
inbound headers, so only the argument and the environment apply there.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from core.config import ServerConfig
from core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

API_KEY_HEADERS = ("x-sendforsign-key", "x-api-key")
CLIENT_KEY_HEADER = "x-client-key"


@dataclass(frozen=True)
class Credentials:
    api_key: str = field(repr=False)
    client_key: str = field(repr=False)
    api_key_source: str = "env"
    client_key_source: str = "env"


def _normalize_headers(headers: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Lower-case header names; the first value wins for repeated or list-valued headers."""
    normalized: dict[str, str] = {}
    if not headers:
        return normalized
    for name, value in headers.items():
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value is None:
            continue
        normalized.setdefault(str(name).lower(), str(value))
    return normalized


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def extract_api_key(headers: Optional[Mapping[str, Any]]) -> Optional[str]:
    normalized = _normalize_headers(headers)
    for name in API_KEY_HEADERS:
        key = _clean(normalized.get(name))
        if key:
            return key
    auth = normalized.get("authorization", "")
    if auth[:7].lower() == "bearer ":
        return _clean(auth[7:])
    return None


def extract_client_key(headers: Optional[Mapping[str, Any]]) -> Optional[str]:
    return _clean(_normalize_headers(headers).get(CLIENT_KEY_HEADER))


def resolve_credentials(
    config: ServerConfig,
    headers: Optional[Mapping[str, Any]] = None,
    client_key: Optional[str] = None,
) -> Credentials:
    """Return the effective credentials or raise UnauthorizedError.

    Headers are consulted only when `config.http_mode` is set; `headers` may be
    None (stdio, or no HTTP request in scope) and that is never an error by
    itself. The api key cannot be overridden per call.
    """
    api_key, api_source = None, "none"
    resolved_client, client_source = None, "none"

    if config.http_mode and headers is not None:
        api_key = extract_api_key(headers)
        if api_key:
            api_source = "header"
        resolved_client = extract_client_key(headers)
        if resolved_client:
            client_source = "header"

    if not resolved_client:
        resolved_client = _clean(client_key)
        if resolved_client:
            client_source = "argument"

    if not api_key and config.api_key:
        api_key, api_source = config.api_key, "env"
    if not resolved_client and config.client_key:
        resolved_client, client_source = config.client_key, "env"

    missing = []
    if not api_key:
        missing.append("apiKey")
    if not resolved_client:
        missing.append("clientKey")
    if missing:
        logger.warning(f"Rejecting call, unresolved credentials: {', '.join(missing)}")
        raise UnauthorizedError(missing)

    return Credentials(
        api_key=api_key,
        client_key=resolved_client,
        api_key_source=api_source,
        client_key_source=client_source,
    )


def request_headers(ctx: Any) -> Optional[Mapping[str, Any]]:
    """Return the inbound HTTP headers for the current tool call, or None.

    FastMCP exposes the Starlette request on the request context for the
    streamable-http transport; under stdio there is no request.
    """
    if ctx is None:
        return None
    try:
        request = ctx.request_context.request
    except (AttributeError, LookupError, ValueError):
        return None
    return getattr(request, "headers", None)
