"""
Base tool helpers

Shared error type and response helpers for agent tools.
"""

from typing import Any, Dict, Optional


class ToolError(Exception):
    """Raised when a tool cannot run; the message is reported back to the model."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


def create_error_response(error: ToolError) -> Dict[str, Any]:
    """
    Create a standardized error response

    Args:
        error: The ToolError to convert

    Returns:
        Standardized error response dictionary
    """
    return {
        "success": False,
        "error": {
            "code": error.code,
            "message": error.message,
            "details": error.details
        }
    }


def response_json(response) -> Any:
    """Decode an httpx response body as JSON, or raise a ToolError."""
    try:
        return response.json()
    except ValueError:
        raise ToolError(
            code="INVALID_RESPONSE",
            message=f"Expected JSON from {response.request.url}, got: {response.text[:200]}",
            details={"status": response.status_code}
        )
