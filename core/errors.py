"""Errors raised by the SendForSign tools.

All of them derive from FastMCP's ToolError, so the hosting runtime reports the
message to the MCP caller as a tool error instead of an internal failure.
"""
from typing import Optional

from mcp.server.fastmcp.exceptions import ToolError


class SendForSignError(ToolError):
    """Base class for errors surfaced to the tool caller."""


class InvalidArgumentError(SendForSignError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f'Missing required argument "{field}"')


class UnauthorizedError(SendForSignError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Unauthorized - API key and client key are required "
            f"(missing: {', '.join(missing)}). Set SFS_API_KEY and SFS_CLIENT_KEY "
            "or send the X-Sendforsign-Key and X-Client-Key headers."
        )


class BackendError(SendForSignError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def from_status(cls, status_code: int, body: str) -> "BackendError":
        return cls(f"SendForSign API error {status_code}: {body}", status_code=status_code, body=body)
