"""
Delegate router

Proxies browser and codebase workflow requests to the engine. Request bodies
are validated here; engine failures are passed through with their status.
"""

import json
import logging

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ValidationError

from seaward.engine.client import EngineClient, EngineNotConfigured, get_engine_client
from seaward.schemas.engine import (
    BrowserAgentRequest,
    BrowserAgentResponse,
    CodebaseAgentRequest,
    flatten_field_errors,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/delegate", tags=["Delegate"])


async def _parse_body(request: Request, schema: type[BaseModel]):
    """Validate the JSON body, returning (model, None) or (None, 400 response)."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    try:
        return schema.model_validate(body), None
    except ValidationError as e:
        return None, JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request body", "errors": flatten_field_errors(e)},
        )


def _engine_unavailable(error: Exception) -> JSONResponse:
    if isinstance(error, EngineNotConfigured):
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(error)})
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": f"Engine API request failed: {str(error)}"},
    )


@router.post("/browser-workflow")
async def browser_workflow(request: Request, engine: EngineClient = Depends(get_engine_client)):
    """Run the engine's browser context flow and return its final result."""
    payload, error_response = await _parse_body(request, BrowserAgentRequest)
    if error_response:
        return error_response

    try:
        response = await engine.browser_context_flow(payload.to_engine_payload())
    except (EngineNotConfigured, httpx.HTTPError) as e:
        return _engine_unavailable(e)

    if response.is_error:
        return JSONResponse(
            status_code=response.status_code,
            content={"error": f"Engine API request failed: {response.status_code} {response.text}"},
        )

    logger.info(f"[BROWSER_WORKFLOW] Response: {response.text}")
    try:
        response_data = json.loads(response.text)
    except json.JSONDecodeError as e:
        logger.error(f"[BROWSER_WORKFLOW] JSON parse error: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": f"Failed to parse JSON response: {str(e)}"},
        )

    # Some engine versions double-encode the body
    if isinstance(response_data, str) and response_data.startswith("{") and response_data.endswith("}"):
        try:
            response_data = json.loads(response_data)
        except json.JSONDecodeError as e:
            logger.error(f"[BROWSER_WORKFLOW] Error parsing nested JSON: {str(e)}")

    try:
        result = BrowserAgentResponse.model_validate(response_data)
    except ValidationError as e:
        logger.error(f"[BROWSER_WORKFLOW] Validation error: {e.errors()}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"message": "Invalid response body from engine", "errors": flatten_field_errors(e)},
        )
    return result.model_dump()


@router.post("/codebase-workflow")
async def codebase_workflow(request: Request, engine: EngineClient = Depends(get_engine_client)):
    """Run the engine's basic codebase flow; its text answer is returned verbatim."""
    payload, error_response = await _parse_body(request, CodebaseAgentRequest)
    if error_response:
        return error_response

    try:
        response = await engine.codebase_basic_flow(payload.to_engine_payload())
    except (EngineNotConfigured, httpx.HTTPError) as e:
        return _engine_unavailable(e)

    if response.is_error:
        return JSONResponse(
            status_code=response.status_code,
            content={"error": f"API request failed: {response.status_code} {response.text}"},
        )

    logger.info(f"[CODEBASE_WORKFLOW] Response: {response.text}")
    return PlainTextResponse(response.text, status_code=status.HTTP_200_OK)
