"""
Agent API Router

Streams one chat turn with the Seaward agent and, when the turn happens in
a project session, saves the history plus the new assistant message.
"""

from typing import Any, Callable, Dict, List
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlmodel import Session

from seaward.agents.agent import SeawardAgent
from seaward.agents.backbone import get_backbone_factory
from seaward.agents.conversion import append_client_message, convert_response_messages_to_ui_message
from seaward.agents.prompts import build_project_context, build_system_prompt
from seaward.agents.ui_stream import create_ui_message_stream_response
from seaward.config import AGENT_MODEL
from seaward.db.config import get_session, get_session_factory
from seaward.middleware.auth import get_current_user
from seaward.models.user import User
from seaward.routers.access import get_owned_project, get_owned_session
from seaward.schemas.agent import AgentRequest
from seaward.services.session_service import SessionService
from seaward.tools.registry import ToolRegistry, get_agent_tools

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Agent"])


def save_turn(
    session_factory: Callable[[], Session],
    session_id: str,
    history: List[Any],
    response_messages: List[Dict[str, Any]],
    message_id: str,
    metadata: Dict[str, Any]
) -> bool:
    """Aggregate the turn into one assistant message and save it with the history."""
    new_message = convert_response_messages_to_ui_message(response_messages, message_id, metadata)
    if new_message is None:
        logger.info("No parts generated from the response messages to save.")
        return False

    with session_factory() as db:
        saved = SessionService(db).save_session_messages(
            session_id, append_client_message(history, new_message)
        )
    if not saved:
        logger.error(f"Turn for session {session_id} was not fully saved")
    return saved


@router.post("/agent")
async def agent_turn(
    request: AgentRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
    backbone_factory=Depends(get_backbone_factory),
    tools: ToolRegistry = Depends(get_agent_tools),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    """
    Stream an agent turn as a UI message stream.

    The acting user is the authenticated user. Without a project the agent
    runs without project context; without a session nothing is saved.
    """
    project = None
    if request.projectId:
        project = get_owned_project(db, request.projectId, current_user)
    else:
        logger.warning("No projectId provided, running without project context.")

    if request.projectSessionId:
        get_owned_session(db, request.projectSessionId, current_user)

    model_id = request.model or AGENT_MODEL
    try:
        backbone = backbone_factory(model_id)
    except Exception as e:
        logger.error(f"Could not create backbone for {model_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Model backbone unavailable: {str(e)}"
        )

    system = build_system_prompt(build_project_context(current_user.id, project))
    agent = SeawardAgent(backbone, tools, model_id)
    message_id = str(uuid.uuid4())
    session_id = request.projectSessionId

    async def on_finish(response_messages: List[Dict[str, Any]], metadata: Dict[str, Any]):
        if not session_id:
            logger.warning("No projectSessionId provided, skipping saveSessionMessages.")
            return
        try:
            await run_in_threadpool(
                save_turn, session_factory, session_id, request.messages, response_messages, message_id, metadata
            )
        except Exception as e:
            logger.error(f"Failed to save turn for session {session_id}: {str(e)}", exc_info=True)

    return create_ui_message_stream_response(
        agent.stream(request.messages, system, on_finish=on_finish, message_id=message_id)
    )
