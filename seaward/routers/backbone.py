"""Backbone router."""
from fastapi import APIRouter

from seaward.agents.backbone import list_available_models
from seaward.schemas.agent import AvailableModels

router = APIRouter(prefix="/backbone", tags=["Backbone"])


@router.get("/list-available-models", response_model=AvailableModels)
async def list_models():
    return AvailableModels(models=list_available_models())
