"""HTTP client for the engine service."""
from seaward.engine.client import EngineClient, EngineNotConfigured, get_engine_client

__all__ = ["EngineClient", "EngineNotConfigured", "get_engine_client"]
