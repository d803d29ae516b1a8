"""
Server-level tests: tools are called the way MCP clients call them, with wire
argument names bound by FastMCP, and over streamable HTTP with real headers.
"""

import json

import pytest
from httpx import ASGITransport, AsyncClient
from mcp.server.fastmcp.exceptions import ToolError

from server import build_server

EXPECTED_TOOLS = {"list_templates", "read_template", "list_placeholders", "create_contract"}


def _text(result):
    content = result[0] if isinstance(result, tuple) else result
    return content[0].text


def _rpc_message(resp):
    """Decode a JSON-RPC reply sent either as plain JSON or as a single SSE event."""
    if resp.headers.get("content-type", "").startswith("application/json"):
        return resp.json()
    for line in resp.text.splitlines():
        if line.startswith("data:"):
            return json.loads(line[len("data:"):])
    raise AssertionError(f"no JSON-RPC message in response: {resp.text!r}")


# ============================================================================
# Tool registry and schemas
# ============================================================================

@pytest.mark.asyncio
async def test_all_tools_registered(env_config, backend):
    mcp = build_server(env_config, backend.client(env_config))

    tools = await mcp.list_tools()

    assert {t.name for t in tools} == EXPECTED_TOOLS


@pytest.mark.asyncio
async def test_schemas_use_wire_argument_names(env_config, backend):
    mcp = build_server(env_config, backend.client(env_config))

    schemas = {t.name: t.inputSchema["properties"] for t in await mcp.list_tools()}

    assert set(schemas["list_templates"]) == {"clientKey"}
    assert set(schemas["read_template"]) == {"templateKey", "clientKey"}
    assert set(schemas["list_placeholders"]) == {"templateKey", "clientKey"}
    assert set(schemas["create_contract"]) == {"name", "value", "clientKey"}
    assert not any("ctx" in props for props in schemas.values())


# ============================================================================
# call_tool with wire arguments
# ============================================================================

@pytest.mark.asyncio
async def test_call_tool_relays_backend_json(env_config, backend_factory):
    backend = backend_factory(200, '{"templates":[{"templateKey":"t1"}]}')
    mcp = build_server(env_config, backend.client(env_config))

    result = await mcp.call_tool("list_templates", {})

    assert json.loads(_text(result)) == {"templates": [{"templateKey": "t1"}]}
    assert backend.sent_json() == {"data": {"clientKey": "env-client", "action": "list"}}


@pytest.mark.asyncio
async def test_call_tool_client_key_overrides_environment(env_config, backend):
    mcp = build_server(env_config, backend.client(env_config))

    await mcp.call_tool("list_templates", {"clientKey": "abc"})

    assert backend.sent_json() == {"data": {"clientKey": "abc", "action": "list"}}


@pytest.mark.asyncio
async def test_call_tool_template_key(env_config, backend):
    mcp = build_server(env_config, backend.client(env_config))

    await mcp.call_tool("read_template", {"templateKey": "tpl-1"})
    await mcp.call_tool("list_placeholders", {"templateKey": "tpl-1", "clientKey": "c2"})

    assert backend.sent_json(0)["data"] == {
        "clientKey": "env-client",
        "action": "read",
        "template": {"templateKey": "tpl-1"},
    }
    assert backend.sent_json(1)["data"] == {"clientKey": "c2", "action": "list", "templateKey": "tpl-1"}


@pytest.mark.asyncio
async def test_call_tool_create_contract(env_config, backend):
    mcp = build_server(env_config, backend.client(env_config))

    await mcp.call_tool("create_contract", {"name": "NDA", "value": "<p>Terms</p>"})

    assert backend.sent_json()["data"]["contract"] == {"name": "NDA", "value": "<p>Terms</p>"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tool_name,arguments,field",
    [
        ("read_template", {}, "templateKey"),
        ("read_template", {"templateKey": " "}, "templateKey"),
        ("list_placeholders", {}, "templateKey"),
        ("create_contract", {"value": "<p/>"}, "name"),
        ("create_contract", {"name": "NDA"}, "value"),
    ],
)
async def test_missing_argument_names_the_field(env_config, backend, tool_name, arguments, field):
    mcp = build_server(env_config, backend.client(env_config))

    with pytest.raises(ToolError) as exc:
        await mcp.call_tool(tool_name, arguments)

    assert f'Missing required argument "{field}"' in str(exc.value)
    assert backend.requests == []


# ============================================================================
# Streamable HTTP
# ============================================================================

@pytest.mark.asyncio
async def test_health_endpoint(http_config, backend):
    mcp = build_server(http_config, backend.client(http_config))
    app = mcp.streamable_http_app()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.text == "ok"


@pytest.mark.asyncio
async def test_http_headers_supply_credentials(http_config, backend_factory):
    backend = backend_factory(200, '{"templates":[]}')
    mcp = build_server(http_config, backend.client(http_config))
    app = mcp.streamable_http_app()
    call = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/call",
        "params": {"name": "list_templates", "arguments": {}},
    }
    headers = {
        "Accept": "application/json, text/event-stream",
        "X-SENDFORSIGN-KEY": "hdr-api",
        "x-client-key": "hdr-client",
    }

    async with mcp.session_manager.run():
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            resp = await client.post("/mcp", json=call, headers=headers)

    assert resp.status_code == 200
    message = _rpc_message(resp)
    assert message["result"].get("isError") is not True
    assert json.loads(message["result"]["content"][0]["text"]) == {"templates": []}
    assert backend.requests[0].headers["x-sendforsign-key"] == "hdr-api"
    assert backend.sent_json() == {"data": {"clientKey": "hdr-client", "action": "list"}}
