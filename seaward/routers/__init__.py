"""Routers package for the Seaward API."""

from .agent import router as agent_router
from .auth import router as auth_router
from .backbone import router as backbone_router
from .delegate import router as delegate_router
from .galatea import router as galatea_router
from .media import router as media_router
from .messages import router as messages_router
from .projects import router as projects_router
from .sessions import router as sessions_router
from .users import router as users_router

__all__ = [
    "agent_router",
    "auth_router",
    "backbone_router",
    "delegate_router",
    "galatea_router",
    "media_router",
    "messages_router",
    "projects_router",
    "sessions_router",
    "users_router",
]
