"""
Galatea device API client.

Galatea serves a small control API under `{project address}/galatea/api`
for file discovery, editor commands and npm scripts. Failures are reported
as `{"success": False, "error": ...}` results rather than raised, so a tool
call can hand them straight back to the model.
"""

from typing import Any, Dict, List, Optional
import logging

import httpx

logger = logging.getLogger(__name__)

DEVICE_TIMEOUT_SECONDS = 120.0


def _first_field(data: Any, *keys: str) -> Any:
    """First truthy value among `keys` of a JSON object body; None for other bodies."""
    if not isinstance(data, dict):
        return None
    for key in keys:
        if data.get(key):
            return data[key]
    return None


class GalateaClient:
    """Client for one device's Galatea API."""

    def __init__(self, url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url.rstrip("/")
        self.transport = transport

    async def _post(self, path: str, body: Optional[Dict[str, Any]] = None) -> httpx.Response:
        async with httpx.AsyncClient(transport=self.transport, timeout=DEVICE_TIMEOUT_SECONDS) as client:
            return await client.post(f"{self.url}/galatea/api{path}", json=body)

    async def find_files(
        self,
        dir: str,
        suffixes: List[str],
        exclude_dirs: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """List files under `dir` with one of `suffixes`."""
        try:
            response = await self._post("/project/find-files", {
                "dir": dir,
                "suffixes": suffixes,
                "exclude_dirs": exclude_dirs,
            })
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Galatea find-files on {self.url} failed: {str(e)}")
            return {"success": False, "error": f"Failed to find files: {str(e)}"}

        if response.is_error:
            return {"success": False, "error": _first_field(data, "message") or "Failed to find files"}

        files = _first_field(data, "files") or []
        return {
            "success": True,
            "files": files,
            "message": f"Found {len(files)} files matching criteria",
        }

    async def editor_command(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Run an editor command; the device's response is returned as is."""
        try:
            response = await self._post("/editor/command", body)
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Galatea editor command on {self.url} failed: {str(e)}")
            return {"success": False, "error": f"Failed to execute editor command: {str(e)}"}

        if response.is_error:
            return {
                "success": False,
                "error": _first_field(data, "message", "error") or "Failed to execute editor command",
            }
        return data

    async def run_script(self, script: str) -> Dict[str, Any]:
        """Run `npm run <script>` (lint or format) in the project root."""
        try:
            response = await self._post(f"/project/{script}")
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Galatea {script} on {self.url} failed: {str(e)}")
            return {"success": False, "error": f"Failed to run npm script: {str(e)}"}

        if response.is_error:
            return {
                "success": False,
                "error": _first_field(data, "stderr", "message") or "Failed to run npm script",
            }
        return data
