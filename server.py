from core.logging_config import get_logger, setup_logging
from core.backend import SendForSignClient
from core.config import ServerConfig, load_server_config
from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from pathlib import Path
from importlib import import_module
from typing import Optional
import pkgutil
import sys

logger = get_logger("server")

TOOLS_PACKAGE = "tools"


def register_tools(mcp: FastMCP, config: ServerConfig, client: SendForSignClient) -> list[str]:
    """Import every public module of the tools package and register the tools it exposes.

    Each module's `get_tools(config, client)` returns tool_name -> {"func", "title", "description"}.
    """
    logger.info("Loading MCP tools...")
    tools_path = Path(__file__).resolve().parent / TOOLS_PACKAGE
    registered_tool_names: list[str] = []
    for finder, name, ispkg in pkgutil.iter_modules([str(tools_path)]):
        if name.startswith("_"):
            continue
        module_name = f"{TOOLS_PACKAGE}.{name}"
        mod = import_module(module_name)
        if not hasattr(mod, "get_tools"):
            logger.warning(f"Tools module {module_name} has no get_tools(); skipping")
            continue
        for tool_name, meta in mod.get_tools(config, client).items():
            if isinstance(meta, dict):
                func = meta.get("func")
                title = meta.get("title")
                description = meta.get("description")
            else:
                func, title, description = meta, None, None

            if not func:
                logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                continue

            mcp.add_tool(func, name=tool_name, title=title, description=description)
            logger.info(f"Added tool: {tool_name} (title={title}) from {module_name}")
            registered_tool_names.append(tool_name)

    logger.info(f"Total tools registered: {len(registered_tool_names)}, tool names: {registered_tool_names}")
    return registered_tool_names


def build_server(config: ServerConfig, client: Optional[SendForSignClient] = None) -> FastMCP:
    if client is None:
        client = SendForSignClient(config)

    mcp = FastMCP(
        config.server_name,
        instructions=config.instructions,
        host=config.host,
        port=config.port,
        stateless_http=True,
    )
    logger.info("MCP server instance created with instructions: %s", bool(config.instructions))

    @mcp.custom_route(config.health_path, methods=["GET"])
    async def health(request: Request) -> PlainTextResponse:
        return PlainTextResponse("ok", status_code=200)

    register_tools(mcp, config, client)
    return mcp


def main() -> None:
    setup_logging()
    logger.info("MCP server bootstrap starting.")
    try:
        config = load_server_config()
        mcp = build_server(config)
        if config.http_mode:
            logger.info(f"Starting MCP server (streamable-http) on {config.host}:{config.port}")
            mcp.run(transport="streamable-http")
        else:
            logger.info("Starting MCP server (stdio)")
            mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/ for details.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
