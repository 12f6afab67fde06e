"""Galatea router: start the helper on a user's device over SSH."""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from seaward.galatea.provider import activate_galatea_for_ssh_device
from seaward.middleware.auth import get_current_user
from seaward.models.user import User
from seaward.schemas.agent import SSHConfig
from seaward.schemas.engine import flatten_field_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/galatea", tags=["Galatea"])


@router.post("/activate")
def activate(
    body: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_user),
):
    """
    Upload (when missing) and launch Galatea on the device in `sshConfig`.

    Runs in the threadpool since the SSH work blocks.
    """
    body = body or {}
    if not body.get("sshConfig"):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"success": False, "error": "Missing sshConfig"})

    try:
        ssh_config = SSHConfig.model_validate(body["sshConfig"])
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Invalid sshConfig", "errors": flatten_field_errors(e)},
        )

    try:
        activate_galatea_for_ssh_device(ssh_config.model_dump(), body.get("remotePath"))
    except Exception as e:
        logger.error(f"Error in /api/galatea/activate: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e) or "Failed to activate Galatea."},
        )

    logger.info(f"Galatea activated on {ssh_config.host} for user {current_user.id}")
    return {"success": True}
