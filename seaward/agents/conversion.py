"""
Message conversion

Moves chat history between its two shapes:

- UI messages: what the client renders and what is persisted (typed parts).
- Model messages: what a backbone consumes and produces. An assistant
  message holds text, reasoning and tool-call parts; a `tool` message holds
  the tool-result parts answering the preceding calls.

A streamed turn ends as a list of model "response messages", which is
aggregated into one assistant UI message before it is saved.
"""

from typing import Any, Dict, List, Optional, Union
import uuid

from pydantic import BaseModel

from seaward.schemas.ui_message import UIMessage


def _as_dict(message: Union[UIMessage, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(message, BaseModel):
        return message.to_dict()
    return message


def _content_parts(content: Union[str, List[Dict[str, Any]], None]) -> List[Dict[str, Any]]:
    if content is None:
        return []
    if isinstance(content, str):
        return [{"type": "text", "text": content}]
    return content


def convert_response_messages_to_ui_message(
    response_messages: List[Dict[str, Any]],
    message_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> Optional[Dict[str, Any]]:
    """
    Fold the response messages of one turn into a single assistant UI message.

    Each assistant message is one step and is preceded by a step-start part.
    Tool results upgrade their matching call in place; a result whose call
    is not in this turn is appended as a result invocation of its own.

    Args:
        response_messages: Assistant and tool messages in the order produced
        message_id: Id for the new message, a UUID when omitted
        metadata: Message metadata to attach

    Returns:
        The UI message as a dict, or None if the turn produced no content
    """
    parts: List[Dict[str, Any]] = []
    invocations: Dict[str, Dict[str, Any]] = {}
    step = 0

    for message in response_messages:
        role = message.get("role")

        if role == "assistant":
            step_started = False
            for part in _content_parts(message.get("content")):
                part_type = part.get("type")
                new_part = None

                if part_type == "text" and part.get("text"):
                    new_part = {"type": "text", "text": part["text"]}
                elif part_type == "reasoning" and part.get("text"):
                    new_part = {"type": "reasoning", "text": part["text"]}
                    if part.get("providerMetadata") is not None:
                        new_part["providerMetadata"] = part["providerMetadata"]
                elif part_type == "tool-call":
                    invocation = {
                        "state": "call",
                        "step": step,
                        "toolCallId": part["toolCallId"],
                        "toolName": part["toolName"],
                        "args": part.get("args"),
                    }
                    invocations[part["toolCallId"]] = invocation
                    new_part = {"type": "tool-invocation", "toolInvocation": invocation}

                if new_part is None:
                    continue
                if not step_started:
                    parts.append({"type": "step-start"})
                    step_started = True
                parts.append(new_part)
            step += 1

        elif role == "tool":
            for part in _content_parts(message.get("content")):
                if part.get("type") != "tool-result":
                    continue
                invocation = invocations.get(part["toolCallId"])
                if invocation is None:
                    invocation = {
                        "step": max(step - 1, 0),
                        "toolCallId": part["toolCallId"],
                        "toolName": part["toolName"],
                        "args": None,
                    }
                    invocations[part["toolCallId"]] = invocation
                    parts.append({"type": "tool-invocation", "toolInvocation": invocation})
                invocation["state"] = "result"
                invocation["result"] = part.get("result")
                if part.get("isError"):
                    invocation["isError"] = True

    if not any(part["type"] != "step-start" for part in parts):
        return None

    ui_message = {
        "id": message_id or str(uuid.uuid4()),
        "role": "assistant",
        "parts": parts,
    }
    if metadata is not None:
        ui_message["metadata"] = metadata
    return ui_message


def _split_steps(parts: List[Dict[str, Any]]) -> List[List[Dict[str, Any]]]:
    blocks: List[List[Dict[str, Any]]] = [[]]
    for part in parts:
        if part.get("type") == "step-start":
            if blocks[-1]:
                blocks.append([])
            continue
        blocks[-1].append(part)
    return [block for block in blocks if block]


def _text_of(parts: List[Dict[str, Any]]) -> str:
    return "\n".join(part["text"] for part in parts if part.get("type") == "text")


def convert_to_model_messages(ui_messages: List[Union[UIMessage, Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Convert UI history into model messages.

    Only completed tool invocations are replayed: each becomes a tool call in
    its step's assistant message plus a result in the tool message after it.
    Step boundaries, partial calls, sources, files and data parts are not
    sent to the model.
    """
    model_messages: List[Dict[str, Any]] = []

    for raw in ui_messages:
        message = _as_dict(raw)
        role = message["role"]
        parts = message.get("parts") or []

        if role in ("system", "user"):
            text = _text_of(parts)
            if text:
                model_messages.append({"role": role, "content": text})
            continue

        for block in _split_steps(parts):
            content: List[Dict[str, Any]] = []
            results: List[Dict[str, Any]] = []
            for part in block:
                part_type = part.get("type")
                if part_type == "text" and part.get("text"):
                    content.append({"type": "text", "text": part["text"]})
                elif part_type == "reasoning" and part.get("text"):
                    content.append({"type": "reasoning", "text": part["text"]})
                elif part_type == "tool-invocation":
                    invocation = part["toolInvocation"]
                    if invocation.get("state") != "result":
                        continue
                    content.append({
                        "type": "tool-call",
                        "toolCallId": invocation["toolCallId"],
                        "toolName": invocation["toolName"],
                        "args": invocation.get("args") or {},
                    })
                    result = {
                        "type": "tool-result",
                        "toolCallId": invocation["toolCallId"],
                        "toolName": invocation["toolName"],
                        "result": invocation.get("result"),
                    }
                    if invocation.get("isError"):
                        result["isError"] = True
                    results.append(result)

            if content:
                model_messages.append({"role": "assistant", "content": content})
            if results:
                model_messages.append({"role": "tool", "content": results})

    return model_messages


def append_client_message(
    messages: List[Union[UIMessage, Dict[str, Any]]],
    message: Union[UIMessage, Dict[str, Any]]
) -> List[Dict[str, Any]]:
    """Append `message`, replacing the last message instead when the ids match."""
    history = [_as_dict(m) for m in messages]
    message = _as_dict(message)
    if history and history[-1].get("id") == message.get("id"):
        return history[:-1] + [message]
    return history + [message]
