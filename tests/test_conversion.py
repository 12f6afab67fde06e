"""Tests for turning streamed responses into a persisted UI message and back."""
from seaward.agents.conversion import (
    append_client_message,
    convert_response_messages_to_ui_message,
    convert_to_model_messages,
)
from seaward.schemas.ui_message import UIMessage


def assistant(*parts):
    return {"role": "assistant", "content": list(parts)}


def tool_results(*parts):
    return {"role": "tool", "content": list(parts)}


def call(call_id, name="browserAgentTool", args=None):
    return {"type": "tool-call", "toolCallId": call_id, "toolName": name, "args": args or {"prompt": "look"}}


def result(call_id, value, name="browserAgentTool", is_error=None):
    part = {"type": "tool-result", "toolCallId": call_id, "toolName": name, "result": value}
    if is_error is not None:
        part["isError"] = is_error
    return part


def test_text_only_turn_becomes_single_step():
    message = convert_response_messages_to_ui_message(
        [assistant({"type": "text", "text": "Hello there"})],
        message_id="m-1",
    )

    assert message == {
        "id": "m-1",
        "role": "assistant",
        "parts": [{"type": "step-start"}, {"type": "text", "text": "Hello there"}],
    }


def test_string_content_is_treated_as_text():
    message = convert_response_messages_to_ui_message([{"role": "assistant", "content": "plain"}])

    assert message["parts"][1] == {"type": "text", "text": "plain"}
    assert message["id"]


def test_tool_result_upgrades_matching_call_in_place():
    message = convert_response_messages_to_ui_message([
        assistant({"type": "text", "text": "Checking"}, call("c1")),
        tool_results(result("c1", {"final_result": "ok"})),
        assistant({"type": "text", "text": "Done"}),
    ])

    assert [p["type"] for p in message["parts"]] == [
        "step-start", "text", "tool-invocation", "step-start", "text",
    ]
    invocation = message["parts"][2]["toolInvocation"]
    assert invocation == {
        "state": "result",
        "step": 0,
        "toolCallId": "c1",
        "toolName": "browserAgentTool",
        "args": {"prompt": "look"},
        "result": {"final_result": "ok"},
    }


def test_steps_are_numbered_per_assistant_message():
    message = convert_response_messages_to_ui_message([
        assistant(call("c1")),
        tool_results(result("c1", 1)),
        assistant(call("c2")),
        tool_results(result("c2", 2)),
    ])

    steps = [p["toolInvocation"]["step"] for p in message["parts"] if p["type"] == "tool-invocation"]
    assert steps == [0, 1]


def test_error_results_are_flagged():
    message = convert_response_messages_to_ui_message([
        assistant(call("c1")),
        tool_results(result("c1", "boom", is_error=True)),
    ])

    invocation = message["parts"][1]["toolInvocation"]
    assert invocation["isError"] is True
    assert invocation["result"] == "boom"


def test_false_error_flag_is_not_copied():
    message = convert_response_messages_to_ui_message([
        assistant(call("c1")),
        tool_results(result("c1", "fine", is_error=False)),
    ])

    assert "isError" not in message["parts"][1]["toolInvocation"]


def test_result_without_call_is_appended():
    message = convert_response_messages_to_ui_message([
        assistant({"type": "text", "text": "hi"}),
        tool_results(result("orphan", "value", name="codebaseNpmScriptTool")),
    ])

    orphan = message["parts"][-1]
    assert orphan["type"] == "tool-invocation"
    assert orphan["toolInvocation"]["state"] == "result"
    assert orphan["toolInvocation"]["toolCallId"] == "orphan"
    assert orphan["toolInvocation"]["args"] is None


def test_empty_text_and_reasoning_are_skipped():
    message = convert_response_messages_to_ui_message([
        assistant({"type": "text", "text": ""}, {"type": "reasoning", "text": ""}),
        assistant({"type": "reasoning", "text": "think", "providerMetadata": {"p": {"sig": "x"}}}),
    ])

    assert message["parts"] == [
        {"type": "step-start"},
        {"type": "reasoning", "text": "think", "providerMetadata": {"p": {"sig": "x"}}},
    ]


def test_no_content_returns_none():
    assert convert_response_messages_to_ui_message([]) is None
    assert convert_response_messages_to_ui_message([assistant({"type": "text", "text": ""})]) is None


def test_metadata_is_attached_and_result_validates():
    message = convert_response_messages_to_ui_message(
        [assistant({"type": "text", "text": "x"}, call("c1"))],
        metadata={"model": "o3", "duration": 12},
    )

    assert message["metadata"] == {"model": "o3", "duration": 12}
    UIMessage.model_validate(message)


def test_convert_to_model_messages_replays_completed_tools_only():
    history = [
        {"id": "u1", "role": "user", "parts": [{"type": "text", "text": "fix the page"}]},
        {
            "id": "a1",
            "role": "assistant",
            "parts": [
                {"type": "step-start"},
                {"type": "text", "text": "On it"},
                {"type": "tool-invocation", "toolInvocation": {
                    "state": "result", "step": 0, "toolCallId": "c1", "toolName": "codebaseNpmScriptTool",
                    "args": {"url": "https://x.example", "script": "lint"}, "result": {"ok": True},
                }},
                {"type": "tool-invocation", "toolInvocation": {
                    "state": "partial-call", "toolCallId": "c2", "toolName": "browserAgentTool", "args": {},
                }},
                {"type": "step-start"},
                {"type": "text", "text": "Lint passed"},
                {"type": "source-url", "sourceId": "s", "url": "https://docs.example"},
            ],
        },
    ]

    model_messages = convert_to_model_messages(history)

    assert model_messages == [
        {"role": "user", "content": "fix the page"},
        {"role": "assistant", "content": [
            {"type": "text", "text": "On it"},
            {"type": "tool-call", "toolCallId": "c1", "toolName": "codebaseNpmScriptTool",
             "args": {"url": "https://x.example", "script": "lint"}},
        ]},
        {"role": "tool", "content": [
            {"type": "tool-result", "toolCallId": "c1", "toolName": "codebaseNpmScriptTool", "result": {"ok": True}},
        ]},
        {"role": "assistant", "content": [{"type": "text", "text": "Lint passed"}]},
    ]


def test_convert_to_model_messages_accepts_models():
    history = [UIMessage.model_validate({"id": "u1", "role": "user", "parts": [{"type": "text", "text": "hi"}]})]

    assert convert_to_model_messages(history) == [{"role": "user", "content": "hi"}]


def test_append_client_message_replaces_same_id():
    history = [
        {"id": "u1", "role": "user", "parts": []},
        {"id": "a1", "role": "assistant", "parts": [{"type": "text", "text": "old"}]},
    ]
    updated = {"id": "a1", "role": "assistant", "parts": [{"type": "text", "text": "new"}]}

    assert append_client_message(history, updated) == [history[0], updated]


def test_append_client_message_appends_new_id():
    history = [{"id": "u1", "role": "user", "parts": []}]
    new = {"id": "a2", "role": "assistant", "parts": []}

    assert append_client_message(history, new) == history + [new]
