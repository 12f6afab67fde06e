"""Environment configuration for the Seaward backend."""
import os
from dotenv import load_dotenv

load_dotenv()

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Auth
SEAWARD_AUTH_SECRET = os.environ.get("SEAWARD_AUTH_SECRET", "change-me-seaward-dev-secret")
TOKEN_EXPIRATION_SECONDS = int(os.environ.get("TOKEN_EXPIRATION_SECONDS", "7200"))
JWT_ALGORITHM = "HS256"

# Model backbone
SEALOS_API_KEY = os.environ.get("SEALOS_API_KEY")
SEALOS_BASE_URL = os.environ.get("SEALOS_BASE_URL")
COHERE_API_KEY = os.environ.get("COHERE_API_KEY")
COHERE_MODEL = os.environ.get("COHERE_MODEL", "command-r-plus")
AGENT_MODEL = os.environ.get("AGENT_MODEL", "claude-sonnet-4-20250514")
AGENT_MAX_STEPS = int(os.environ.get("AGENT_MAX_STEPS", "30"))
CLAUDE_MAX_TOKENS = int(os.environ.get("CLAUDE_MAX_TOKENS", "8192"))

DEFAULT_BACKBONE_MODELS = [
    "claude-opus-4-20250514",
    "gemini-2.5-pro-preview-05-06",
    "o3",
]

ENGINE_TIMEOUT_SECONDS = float(os.environ.get("ENGINE_TIMEOUT_SECONDS", "600"))
DEFAULT_GALATEA_PATH = "/home/devbox/galatea"


def get_backbone_models() -> list[str]:
    """Model ids offered to clients, from BACKBONE_MODELS or the defaults."""
    raw = os.environ.get("BACKBONE_MODELS", "")
    models = [m.strip() for m in raw.split(",") if m.strip()]
    return models or list(DEFAULT_BACKBONE_MODELS)


def get_engine_url() -> str | None:
    """Base URL of the engine service. Read per call so a missing value is reported per request."""
    url = os.environ.get("SEAWEED_ENGINE_URL")
    return url.rstrip("/") if url else None


def get_galatea_release() -> str | None:
    """Download URL of the Galatea release binary."""
    return os.environ.get("GALATEA_RELEASE")
