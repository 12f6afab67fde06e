"""
Seaward Agent

Runs one chat turn: streams model steps from the backbone, executes the
server-side tool calls of each step through the tool registry, feeds the
results back, and reports everything as UI message stream chunks.

The turn ends when a step makes no tool calls, when a step calls a tool the
client must answer (askConfirmationTool), or after the step limit.
"""

from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional
import logging
import time
import uuid

from seaward.agents.conversion import convert_to_model_messages
from seaward.config import AGENT_MAX_STEPS
from seaward.tools.base import ToolError, create_error_response
from seaward.tools.registry import ToolRegistry
from seaward.utils.logger import get_logger

logger = logging.getLogger(__name__)
turn_logger = get_logger("seaward.agent.turns")

OnFinish = Callable[[List[Dict[str, Any]], Dict[str, Any]], Awaitable[None]]


class SeawardAgent:
    """
    Tool-calling chat agent.

    Responsibilities:
    - Stream each model step to the client as it arrives
    - Execute tool calls with a server-side handler
    - Attach step and turn metadata (model, duration, totalTokens)
    - Hand the turn's response messages to `on_finish`
    """

    def __init__(
        self,
        backbone,
        tools: ToolRegistry,
        model_id: str,
        max_steps: int = AGENT_MAX_STEPS
    ):
        self.backbone = backbone
        self.tools = tools
        self.model_id = model_id
        self.max_steps = max_steps
        logger.info(f"SeawardAgent initialized with model {model_id} and tools {tools.list_tools()}")

    async def _run_tool(self, call: Dict[str, Any]) -> Dict[str, Any]:
        """Execute one tool call and return its tool-result part."""
        result_part = {
            "type": "tool-result",
            "toolCallId": call["toolCallId"],
            "toolName": call["toolName"],
        }
        try:
            result_part["result"] = await self.tools.invoke_tool(call["toolName"], call["args"])
        except ToolError as e:
            result_part["result"] = create_error_response(e)
            result_part["isError"] = True
        except Exception as e:
            result_part["result"] = str(e)
            result_part["isError"] = True
        return result_part

    async def stream(
        self,
        ui_messages: List[Any],
        system: str,
        on_finish: Optional[OnFinish] = None,
        message_id: Optional[str] = None
    ) -> AsyncIterator[Dict[str, Any]]:
        """
        Run the turn, yielding UI message stream chunks.

        A backbone failure is reported as an `error` chunk and `on_finish`
        is not called.
        """
        message_id = message_id or str(uuid.uuid4())
        started = time.monotonic()
        history = convert_to_model_messages(ui_messages)
        response_messages: List[Dict[str, Any]] = []
        tool_schemas = list(self.tools.get_tool_schemas().values())
        metadata: Dict[str, Any] = {}
        total_tokens = 0

        yield {"type": "start", "messageId": message_id}

        try:
            for step in range(self.max_steps):
                yield {"type": "start-step"}

                content: List[Dict[str, Any]] = []
                tool_calls: List[Dict[str, Any]] = []
                open_part: Optional[Dict[str, Any]] = None
                open_id: Optional[str] = None
                finish: Dict[str, Any] = {}

                async for event in self.backbone.stream(system, history + response_messages, tool_schemas):
                    event_type = event["type"]

                    if event_type in ("text-delta", "reasoning-delta"):
                        kind = "text" if event_type == "text-delta" else "reasoning"
                        if open_part is None or open_part["type"] != kind:
                            if open_part is not None:
                                yield {"type": f"{open_part['type']}-end", "id": open_id}
                            open_part = {"type": kind, "text": ""}
                            open_id = f"{kind}-{step}-{len(content)}"
                            content.append(open_part)
                            yield {"type": f"{kind}-start", "id": open_id}
                        open_part["text"] += event["text"]
                        yield {"type": f"{kind}-delta", "id": open_id, "delta": event["text"]}

                    elif event_type == "tool-call":
                        if open_part is not None:
                            yield {"type": f"{open_part['type']}-end", "id": open_id}
                            open_part = None
                        call = {
                            "type": "tool-call",
                            "toolCallId": event["toolCallId"],
                            "toolName": event["toolName"],
                            "args": event.get("args") or {},
                        }
                        content.append(call)
                        tool_calls.append(call)
                        yield {"type": "tool-input-start", "toolCallId": call["toolCallId"], "toolName": call["toolName"]}
                        yield {
                            "type": "tool-input-available",
                            "toolCallId": call["toolCallId"],
                            "toolName": call["toolName"],
                            "input": call["args"],
                        }

                    elif event_type == "finish":
                        finish = event

                if open_part is not None:
                    yield {"type": f"{open_part['type']}-end", "id": open_id}

                response_messages.append({"role": "assistant", "content": content})
                total_tokens += (finish.get("usage") or {}).get("totalTokens", 0)

                results: List[Dict[str, Any]] = []
                awaiting_client = False
                for call in tool_calls:
                    tool = self.tools.tools.get(call["toolName"])
                    if tool is not None and tool.client_side:
                        awaiting_client = True
                        continue
                    result = await self._run_tool(call)
                    results.append(result)
                    if result.get("isError"):
                        yield {
                            "type": "tool-output-error",
                            "toolCallId": call["toolCallId"],
                            "errorText": str(result["result"]),
                        }
                    else:
                        yield {
                            "type": "tool-output-available",
                            "toolCallId": call["toolCallId"],
                            "output": result["result"],
                        }
                if results:
                    response_messages.append({"role": "tool", "content": results})

                metadata.update({
                    "model": finish.get("modelId") or self.model_id,
                    "duration": int((time.monotonic() - started) * 1000),
                })
                yield {"type": "finish-step"}
                yield {"type": "message-metadata", "messageMetadata": dict(metadata)}

                if not tool_calls or awaiting_client:
                    break
            else:
                logger.warning(f"Agent stopped after reaching {self.max_steps} steps")

        except Exception as e:
            logger.error(f"Agent stream failed: {str(e)}", exc_info=True)
            yield {"type": "error", "errorText": str(e)}
            return

        metadata["totalTokens"] = total_tokens
        yield {"type": "message-metadata", "messageMetadata": {"totalTokens": total_tokens}}
        yield {"type": "finish"}

        turn_logger.info(
            "agent turn finished",
            model=metadata.get("model"),
            duration=metadata.get("duration"),
            tokens=total_tokens,
            steps=sum(1 for m in response_messages if m["role"] == "assistant"),
        )

        if on_finish is not None:
            await on_finish(response_messages, dict(metadata))
