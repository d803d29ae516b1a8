from typing import Any

from mcp.server.fastmcp import Context

from core.arguments import CreateContractArgs, parse_arguments  # type: ignore
from core.backend import SendForSignClient  # type: ignore
from core.config import ServerConfig  # type: ignore
from tools._common import call_backend  # type: ignore


def get_tools(config: ServerConfig, client: SendForSignClient) -> dict[str, Any]:
    async def create_contract(
        ctx: Context,
        name: str | None = None,
        value: str | None = None,
        clientKey: str | None = None,
    ) -> str:
        """Create a new SendForSign contract from HTML/text value with a given name.

        Args:
            name: Human-readable contract name (required).
            value: HTML content of the contract, e.g. <p>...</p> (required).
            clientKey: Optional client key overriding the configured one for this call.
        """
        args = parse_arguments(CreateContractArgs, name=name, value=value, clientKey=clientKey)
        return await call_backend(
            config, client, ctx, args, "contract", "create",
            contract={"name": args.name, "value": args.value},
        )

    return {
        "create_contract": {
            "func": create_contract,
            "title": "Create contract",
            "description": "Create a new SendForSign contract from HTML/text value with a given name. Both name and value are required.",
        }
    }
