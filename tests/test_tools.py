"""Tests for the tool registry and the agent tools."""
import asyncio
import json

import httpx
import pytest
from pydantic import ValidationError

from seaward.engine.client import EngineClient
from seaward.galatea.client import GalateaClient
from seaward.tools.base import ToolError
from seaward.tools.registry import DEFAULT_AGENT_TOOLS, build_default_registry


def make_registry(engine_handler=None, device_handler=None):
    engine_handler = engine_handler or (lambda request: httpx.Response(200, json={"ok": True}))
    device_handler = device_handler or (lambda request: httpx.Response(200, json={"ok": True}))
    engine_client = EngineClient(base_url="http://engine.test", transport=httpx.MockTransport(engine_handler))
    device_transport = httpx.MockTransport(device_handler)
    return build_default_registry(
        engine_client=engine_client,
        galatea_client_factory=lambda url: GalateaClient(url, transport=device_transport),
    )


def invoke(registry, name, arguments):
    return asyncio.run(registry.invoke_tool(name, arguments))


def test_all_tools_are_registered_and_agent_subset_excludes_codebase_agent():
    registry = make_registry()

    assert set(registry.list_tools()) == {
        "browserAgentTool",
        "codebaseAgentTool",
        "codebaseFindFilesTool",
        "codebaseEditorCommandTool",
        "codebaseNpmScriptTool",
        "askConfirmationTool",
    }
    assert "codebaseAgentTool" not in registry.subset(DEFAULT_AGENT_TOOLS).list_tools()


def test_schemas_come_from_parameter_models():
    schema = make_registry().get_tool_schemas()["codebaseNpmScriptTool"]

    assert schema["parameters"]["properties"]["script"]["enum"] == ["lint", "format"]
    assert set(schema["parameters"]["required"]) == {"url", "script"}


def test_browser_agent_tool_calls_full_flow():
    seen = {}

    def engine(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"final_result": "Pricing page shows 3 plans"})

    result = invoke(make_registry(engine_handler=engine), "browserAgentTool", {
        "user_id": "u1", "prompt": "Summarise pricing", "url": "https://shop.example.com",
    })

    assert result == {"final_result": "Pricing page shows 3 plans"}
    assert seen["url"] == "http://engine.test/browser/full_flow"
    assert seen["body"] == {"user_id": "u1", "prompt": "Summarise pricing", "url": "https://shop.example.com"}


def test_engine_failure_raises_tool_error():
    registry = make_registry(engine_handler=lambda request: httpx.Response(500, text="crashed"))

    with pytest.raises(ToolError, match="500 crashed"):
        invoke(registry, "codebaseAgentTool", {"user_id": "u1", "prompt": "p", "url": "https://x.example"})


def test_arguments_are_validated_before_the_handler():
    with pytest.raises(ValidationError):
        invoke(make_registry(), "codebaseNpmScriptTool", {"url": "https://x.example", "script": "test"})


@pytest.mark.parametrize("arguments", [
    {"command": "view"},
    {"command": "view", "path": "a.ts", "paths": ["b.ts"]},
    {"command": "create", "file_text": "x"},
    {"command": "str_replace", "path": "a.ts", "paths": ["b.ts"]},
])
def test_editor_command_path_rules(arguments):
    with pytest.raises(ValidationError):
        invoke(make_registry(), "codebaseEditorCommandTool", dict(arguments, url="https://x.example"))


def test_editor_multi_file_view_sends_paths():
    seen = {}

    def device(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"multi_content": {}})

    invoke(make_registry(device_handler=device), "codebaseEditorCommandTool", {
        "url": "https://x.example", "command": "view", "paths": ["a.ts", "b.ts"], "view_range": [1, 10],
    })

    assert seen["url"] == "https://x.example/galatea/api/editor/command"
    assert seen["body"] == {"command": "view", "view_range": [1, 10], "paths": ["a.ts", "b.ts"]}


def test_editor_insert_sends_only_given_fields():
    seen = {}

    def device(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True})

    invoke(make_registry(device_handler=device), "codebaseEditorCommandTool", {
        "url": "https://x.example", "command": "insert", "path": "a.ts", "insert_line": 3, "new_str": "// hi",
    })

    assert seen["body"] == {"command": "insert", "view_range": None, "path": "a.ts", "insert_line": 3, "new_str": "// hi"}


def test_npm_script_tool_posts_to_script_endpoint():
    seen = {}

    def device(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"stdout": "formatted"})

    result = invoke(make_registry(device_handler=device), "codebaseNpmScriptTool", {
        "url": "https://x.example", "script": "format",
    })

    assert seen["url"] == "https://x.example/galatea/api/project/format"
    assert result == {"stdout": "formatted"}


def test_confirmation_tool_is_client_side():
    registry = make_registry()

    assert registry.get_tool("askConfirmationTool").client_side
    with pytest.raises(ValueError):
        invoke(registry, "askConfirmationTool", {"proposition": "Deploy now?"})


def test_unknown_tool():
    with pytest.raises(ValueError, match="not found"):
        invoke(make_registry(), "deleteEverythingTool", {})
