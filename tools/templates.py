from typing import Any

from mcp.server.fastmcp import Context

from core.arguments import ListPlaceholdersArgs, ListTemplatesArgs, ReadTemplateArgs, parse_arguments  # type: ignore
from core.backend import SendForSignClient  # type: ignore
from core.config import ServerConfig  # type: ignore
from tools._common import call_backend  # type: ignore

# Parameter names are the wire names MCP clients send (templateKey, clientKey).
# Required ones default to None so a missing value is reported as InvalidArgumentError.


def get_tools(config: ServerConfig, client: SendForSignClient) -> dict[str, Any]:
    async def list_templates(ctx: Context, clientKey: str | None = None) -> str:
        """List all available SendForSign templates and their keys."""
        args = parse_arguments(ListTemplatesArgs, clientKey=clientKey)
        return await call_backend(config, client, ctx, args, "template", "list")

    async def read_template(ctx: Context, templateKey: str | None = None, clientKey: str | None = None) -> str:
        """Read a SendForSign template content by templateKey."""
        args = parse_arguments(ReadTemplateArgs, templateKey=templateKey, clientKey=clientKey)
        return await call_backend(
            config, client, ctx, args, "template", "read",
            template={"templateKey": args.template_key},
        )

    async def list_placeholders(ctx: Context, templateKey: str | None = None, clientKey: str | None = None) -> str:
        """List placeholders for a SendForSign template by templateKey."""
        args = parse_arguments(ListPlaceholdersArgs, templateKey=templateKey, clientKey=clientKey)
        return await call_backend(
            config, client, ctx, args, "placeholder", "list",
            templateKey=args.template_key,
        )

    return {
        "list_templates": {
            "func": list_templates,
            "title": "List templates",
            "description": "List all available SendForSign templates and their keys. Optional clientKey overrides the configured client key.",
        },
        "read_template": {
            "func": read_template,
            "title": "Read template",
            "description": "Read a SendForSign template content by templateKey (required). Use the list_templates tool to get the templateKey if needed.",
        },
        "list_placeholders": {
            "func": list_placeholders,
            "title": "List placeholders",
            "description": "List placeholders for a specific SendForSign template by templateKey (required).",
        },
    }
