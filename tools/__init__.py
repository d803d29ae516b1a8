# tools package for MCP server tools
# Modules in this package expose `get_tools(config: ServerConfig, client: SendForSignClient) -> dict[str, dict]`
# mapping tool name -> {"func", "title", "description"}. Modules starting with "_" are helpers and are not scanned.
__all__ = []
