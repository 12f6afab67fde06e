"""
UI message stream framing.

Chunks are sent as server-sent events, one JSON object per `data:` line,
and the stream is closed with a `[DONE]` sentinel.
"""
from typing import Any, AsyncIterator, Dict
import json

from fastapi.responses import StreamingResponse

UI_MESSAGE_STREAM_HEADERS = {
    "x-vercel-ai-ui-message-stream": "v1",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_sse(chunk: Dict[str, Any]) -> str:
    return f"data: {json.dumps(chunk, default=str)}\n\n"


async def to_sse(chunks: AsyncIterator[Dict[str, Any]]) -> AsyncIterator[str]:
    async for chunk in chunks:
        yield format_sse(chunk)
    yield "data: [DONE]\n\n"


def create_ui_message_stream_response(chunks: AsyncIterator[Dict[str, Any]]) -> StreamingResponse:
    """Wrap an agent chunk stream in an SSE response."""
    return StreamingResponse(
        to_sse(chunks),
        media_type="text/event-stream",
        headers=UI_MESSAGE_STREAM_HEADERS,
    )
