"""
Model backbones

A backbone streams one model step for a system prompt, a model-message
history and a tool list, and reports it as provider-neutral events:

- {"type": "text-delta", "text": ...}
- {"type": "reasoning-delta", "text": ...}
- {"type": "tool-call", "toolCallId": ..., "toolName": ..., "args": {...}}
- {"type": "finish", "finishReason": ..., "usage": {...}, "modelId": ...}

Sealos fronts the hosted models with one gateway that speaks both the OpenAI
and the Anthropic protocol: Claude models go through the Anthropic SDK, the
others through the OpenAI SDK. Cohere's command models are called through
the Cohere SDK.
"""

from typing import Any, AsyncIterator, Dict, List, Optional
import json
import logging

from anthropic import AsyncAnthropic
import cohere
from openai import AsyncOpenAI

from seaward.config import (
    CLAUDE_MAX_TOKENS,
    COHERE_API_KEY,
    COHERE_MODEL,
    SEALOS_API_KEY,
    SEALOS_BASE_URL,
    get_backbone_models,
)

logger = logging.getLogger(__name__)


def _parse_arguments(raw: Optional[str]) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Tool call arguments are not valid JSON: {raw[:200]}")
        return {}
    return parsed if isinstance(parsed, dict) else {}


def _usage(input_tokens: Optional[int], output_tokens: Optional[int], total_tokens: Optional[int] = None) -> Dict[str, int]:
    input_tokens = int(input_tokens or 0)
    output_tokens = int(output_tokens or 0)
    return {
        "inputTokens": input_tokens,
        "outputTokens": output_tokens,
        "totalTokens": int(total_tokens) if total_tokens is not None else input_tokens + output_tokens,
    }


def to_chat_messages(system: str, messages: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Convert model messages to the chat format shared by the OpenAI and
    Cohere v2 APIs. Reasoning is not sent back to the provider.
    """
    chat: List[Dict[str, Any]] = [{"role": "system", "content": system}]
    for message in messages:
        role = message["role"]
        content = message.get("content")

        if role in ("system", "user"):
            chat.append({"role": role, "content": content})
        elif role == "assistant":
            parts = [{"type": "text", "text": content}] if isinstance(content, str) else content
            text = "".join(p["text"] for p in parts if p.get("type") == "text")
            tool_calls = [
                {
                    "id": p["toolCallId"],
                    "type": "function",
                    "function": {"name": p["toolName"], "arguments": json.dumps(p.get("args") or {})},
                }
                for p in parts if p.get("type") == "tool-call"
            ]
            entry: Dict[str, Any] = {"role": "assistant"}
            if text:
                entry["content"] = text
            if tool_calls:
                entry["tool_calls"] = tool_calls
            if text or tool_calls:
                chat.append(entry)
        elif role == "tool":
            for part in content:
                chat.append({
                    "role": "tool",
                    "tool_call_id": part["toolCallId"],
                    "content": json.dumps(part.get("result"), default=str),
                })
    return chat


def to_function_tools(tools: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "type": "function",
            "function": {
                "name": tool["name"],
                "description": tool["description"],
                "parameters": tool["parameters"],
            },
        }
        for tool in tools
    ]


def _tool_result_content(result: Any) -> str:
    return result if isinstance(result, str) else json.dumps(result, default=str)


def to_anthropic_messages(system: str, messages: List[Dict[str, Any]]):
    """
    Convert model messages to the Anthropic Messages format.

    System messages from the history are appended to the system prompt and
    tool results travel in a user message. Returns (system, messages).
    """
    system_blocks = [system]
    converted: List[Dict[str, Any]] = []
    for message in messages:
        role = message["role"]
        content = message.get("content")

        if role == "system":
            system_blocks.append(content)
        elif role == "user":
            converted.append({"role": "user", "content": content})
        elif role == "assistant":
            parts = [{"type": "text", "text": content}] if isinstance(content, str) else content
            blocks = []
            for part in parts:
                if part.get("type") == "text" and part.get("text"):
                    blocks.append({"type": "text", "text": part["text"]})
                elif part.get("type") == "tool-call":
                    blocks.append({
                        "type": "tool_use",
                        "id": part["toolCallId"],
                        "name": part["toolName"],
                        "input": part.get("args") or {},
                    })
            if blocks:
                converted.append({"role": "assistant", "content": blocks})
        elif role == "tool":
            results = []
            for part in content:
                block = {
                    "type": "tool_result",
                    "tool_use_id": part["toolCallId"],
                    "content": _tool_result_content(part.get("result")),
                }
                if part.get("isError"):
                    block["is_error"] = True
                results.append(block)
            converted.append({"role": "user", "content": results})
    return "\n\n".join(system_blocks), converted


class SealosBackbone:
    """Streaming chat completions through the Sealos OpenAI-compatible gateway."""

    def __init__(self, model_name: str, client: Optional[AsyncOpenAI] = None):
        self.model_name = model_name
        self.client = client or AsyncOpenAI(api_key=SEALOS_API_KEY, base_url=SEALOS_BASE_URL)

    async def stream(
        self,
        system: str,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]]
    ) -> AsyncIterator[Dict[str, Any]]:
        request: Dict[str, Any] = {
            "model": self.model_name,
            "messages": to_chat_messages(system, messages),
            "stream": True,
            "stream_options": {"include_usage": True},
        }
        if tools:
            request["tools"] = to_function_tools(tools)

        stream = await self.client.chat.completions.create(**request)

        pending_calls: Dict[int, Dict[str, str]] = {}
        finish_reason = "stop"
        usage = _usage(0, 0)
        model_id = self.model_name

        async for chunk in stream:
            model_id = chunk.model or model_id
            if chunk.usage is not None:
                usage = _usage(chunk.usage.prompt_tokens, chunk.usage.completion_tokens, chunk.usage.total_tokens)
            if not chunk.choices:
                continue

            choice = chunk.choices[0]
            delta = choice.delta
            reasoning = getattr(delta, "reasoning_content", None)
            if reasoning:
                yield {"type": "reasoning-delta", "text": reasoning}
            if delta.content:
                yield {"type": "text-delta", "text": delta.content}
            for call in delta.tool_calls or []:
                pending = pending_calls.setdefault(call.index, {"id": "", "name": "", "arguments": ""})
                if call.id:
                    pending["id"] = call.id
                if call.function is not None:
                    if call.function.name:
                        pending["name"] += call.function.name
                    if call.function.arguments:
                        pending["arguments"] += call.function.arguments
            if choice.finish_reason:
                finish_reason = choice.finish_reason

        for index in sorted(pending_calls):
            call = pending_calls[index]
            yield {
                "type": "tool-call",
                "toolCallId": call["id"] or f"call_{index}",
                "toolName": call["name"],
                "args": _parse_arguments(call["arguments"]),
            }

        yield {"type": "finish", "finishReason": finish_reason, "usage": usage, "modelId": model_id}


class ClaudeBackbone:
    """Streaming Claude messages through the Sealos gateway's Anthropic endpoint."""

    def __init__(
        self,
        model_name: str,
        client: Optional[AsyncAnthropic] = None,
        max_tokens: int = CLAUDE_MAX_TOKENS
    ):
        self.model_name = model_name
        self.max_tokens = max_tokens
        self.client = client or AsyncAnthropic(api_key=SEALOS_API_KEY, base_url=SEALOS_BASE_URL)

    async def stream(
        self,
        system: str,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]]
    ) -> AsyncIterator[Dict[str, Any]]:
        system_prompt, claude_messages = to_anthropic_messages(system, messages)
        request: Dict[str, Any] = {
            "model": self.model_name,
            "max_tokens": self.max_tokens,
            "system": system_prompt,
            "messages": claude_messages,
            "stream": True,
        }
        if tools:
            request["tools"] = [
                {"name": tool["name"], "description": tool["description"], "input_schema": tool["parameters"]}
                for tool in tools
            ]

        stream = await self.client.messages.create(**request)

        # tool_use blocks by content block index
        pending_calls: Dict[int, Dict[str, str]] = {}
        input_tokens = 0
        output_tokens = 0
        finish_reason = "stop"
        model_id = self.model_name

        async for event in stream:
            event_type = event.type

            if event_type == "message_start":
                model_id = event.message.model or model_id
                if event.message.usage is not None:
                    input_tokens = event.message.usage.input_tokens or 0
            elif event_type == "content_block_start":
                block = event.content_block
                if block.type == "tool_use":
                    pending_calls[event.index] = {"id": block.id, "name": block.name, "arguments": ""}
            elif event_type == "content_block_delta":
                delta = event.delta
                if delta.type == "text_delta" and delta.text:
                    yield {"type": "text-delta", "text": delta.text}
                elif delta.type == "thinking_delta" and delta.thinking:
                    yield {"type": "reasoning-delta", "text": delta.thinking}
                elif delta.type == "input_json_delta" and event.index in pending_calls:
                    pending_calls[event.index]["arguments"] += delta.partial_json or ""
            elif event_type == "content_block_stop" and event.index in pending_calls:
                call = pending_calls.pop(event.index)
                yield {
                    "type": "tool-call",
                    "toolCallId": call["id"],
                    "toolName": call["name"],
                    "args": _parse_arguments(call["arguments"]),
                }
            elif event_type == "message_delta":
                if event.delta.stop_reason:
                    finish_reason = event.delta.stop_reason
                if event.usage is not None:
                    output_tokens = event.usage.output_tokens or output_tokens

        yield {
            "type": "finish",
            "finishReason": finish_reason,
            "usage": _usage(input_tokens, output_tokens),
            "modelId": model_id,
        }


class CohereBackbone:
    """Streaming chat through Cohere's v2 API."""

    def __init__(self, model_name: str = COHERE_MODEL, client: Optional[cohere.AsyncClientV2] = None):
        self.model_name = model_name
        self.client = client or cohere.AsyncClientV2(api_key=COHERE_API_KEY)

    async def stream(
        self,
        system: str,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]]
    ) -> AsyncIterator[Dict[str, Any]]:
        request: Dict[str, Any] = {
            "model": self.model_name,
            "messages": to_chat_messages(system, messages),
        }
        if tools:
            request["tools"] = to_function_tools(tools)

        current_call: Optional[Dict[str, str]] = None
        finish_reason = "stop"
        usage = _usage(0, 0)

        async for event in self.client.chat_stream(**request):
            event_type = getattr(event, "type", None)

            if event_type == "content-delta":
                text = event.delta.message.content.text
                if text:
                    yield {"type": "text-delta", "text": text}
            elif event_type == "tool-plan-delta":
                plan = event.delta.message.tool_plan
                if plan:
                    yield {"type": "reasoning-delta", "text": plan}
            elif event_type == "tool-call-start":
                tool_call = event.delta.message.tool_calls
                current_call = {
                    "id": tool_call.id,
                    "name": tool_call.function.name,
                    "arguments": tool_call.function.arguments or "",
                }
            elif event_type == "tool-call-delta" and current_call is not None:
                current_call["arguments"] += event.delta.message.tool_calls.function.arguments or ""
            elif event_type == "tool-call-end" and current_call is not None:
                yield {
                    "type": "tool-call",
                    "toolCallId": current_call["id"],
                    "toolName": current_call["name"],
                    "args": _parse_arguments(current_call["arguments"]),
                }
                current_call = None
            elif event_type == "message-end":
                delta = event.delta
                if delta is not None:
                    finish_reason = (delta.finish_reason or finish_reason).lower()
                    tokens = getattr(delta.usage, "tokens", None) if delta.usage else None
                    if tokens is not None:
                        usage = _usage(tokens.input_tokens, tokens.output_tokens)

        yield {"type": "finish", "finishReason": finish_reason, "usage": usage, "modelId": self.model_name}


def list_available_models() -> List[str]:
    """Model ids clients may pick from."""
    models = get_backbone_models()
    if COHERE_API_KEY and COHERE_MODEL not in models:
        models.append(COHERE_MODEL)
    return models


def get_backbone(model_name: str):
    """Pick the provider for a model id."""
    if model_name.startswith("command"):
        if not COHERE_API_KEY:
            raise ValueError(f"COHERE_API_KEY is required for model {model_name}")
        return CohereBackbone(model_name)
    if model_name.startswith("claude"):
        return ClaudeBackbone(model_name)
    return SealosBackbone(model_name)


def get_backbone_factory():
    """Dependency returning the function used to build a backbone per request."""
    return get_backbone
