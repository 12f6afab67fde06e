"""
Codebase tools

Direct file and project operations on the user's device through Galatea.
Device-side failures come back as {"success": False, "error": ...}.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from seaward.tools.registry import Tool

URL_DESCRIPTION = "The base URL of the backend API (e.g., http://localhost:3000)."


class FindFilesParams(BaseModel):
    url: str = Field(..., description=URL_DESCRIPTION)
    dir: str = Field(..., description="Directory path to search from (relative to project root, e.g., 'project/src/').")
    suffixes: List[str] = Field(..., description="File extensions to search for (e.g., ['ts', 'tsx', 'js']).")
    exclude_dirs: Optional[List[str]] = Field(None, description="Directories to exclude (e.g., ['node_modules', 'dist']).")


class EditorCommandParams(BaseModel):
    url: str = Field(..., description=URL_DESCRIPTION)
    command: Literal["view", "create", "str_replace", "insert", "undo_edit"] = Field(
        ..., description="The editor command to execute."
    )
    path: Optional[str] = Field(
        None,
        description="The file path to operate on (relative to project root). Required for non-view commands and single-file view."
    )
    paths: Optional[List[str]] = Field(None, description="An array of file paths to view (for multi-file view operations only).")
    file_text: Optional[str] = Field(None, description="The file content for create or replace operations.")
    insert_line: Optional[int] = Field(None, description="The line number for insert operations (1-based).")
    new_str: Optional[str] = Field(None, description="The new string for insert or str_replace operations.")
    old_str: Optional[str] = Field(None, description="The old string to be replaced in str_replace operations.")
    view_range: Optional[List[int]] = Field(
        None,
        description="The line range to view (e.g., [1, 10] or [5, -1] for all lines from 5). Applied to all files in a multi-file view."
    )

    @model_validator(mode="after")
    def check_path_arguments(self):
        if self.command == "view":
            if not self.path and not self.paths:
                raise ValueError(
                    "For 'view' command, either 'path' (for single file) or a non-empty 'paths' array "
                    "(for multiple files) must be provided."
                )
            if self.path and self.paths:
                raise ValueError("For 'view' command, provide either 'path' or 'paths', not both.")
        else:
            if not self.path:
                raise ValueError(f"'path' is required for command '{self.command}'.")
            if self.paths:
                raise ValueError(f"'paths' should not be provided for command '{self.command}'.")
        return self

    def to_command_body(self) -> dict:
        body = {"command": self.command, "view_range": self.view_range}
        if self.command == "view" and self.paths:
            body["paths"] = self.paths
        else:
            body["path"] = self.path
        for key in ("file_text", "insert_line", "new_str", "old_str"):
            value = getattr(self, key)
            if value is not None:
                body[key] = value
        return body


class NpmScriptParams(BaseModel):
    url: str = Field(..., description=URL_DESCRIPTION)
    script: Literal["lint", "format"] = Field(..., description="The npm script to run: 'lint' or 'format'.")


def register_codebase_find_files_tool(registry, galatea_client_factory):
    """Register codebaseFindFilesTool"""
    async def handler(params: FindFilesParams):
        client = galatea_client_factory(params.url)
        return await client.find_files(params.dir, params.suffixes, params.exclude_dirs)

    registry.register_tool(Tool(
        name="codebaseFindFilesTool",
        description="Find files in the project matching specific suffixes and excluding directories.",
        parameters=FindFilesParams,
        handler=handler,
    ))


def register_codebase_editor_command_tool(registry, galatea_client_factory):
    """Register codebaseEditorCommandTool"""
    async def handler(params: EditorCommandParams):
        return await galatea_client_factory(params.url).editor_command(params.to_command_body())

    registry.register_tool(Tool(
        name="codebaseEditorCommandTool",
        description=(
            "Send an editor command (view, create, str_replace, insert, undo_edit) to the backend for "
            "file operations. For 'view', can view a single file using 'path' or multiple files using 'paths'."
        ),
        parameters=EditorCommandParams,
        handler=handler,
    ))


def register_codebase_npm_script_tool(registry, galatea_client_factory):
    """Register codebaseNpmScriptTool"""
    async def handler(params: NpmScriptParams):
        return await galatea_client_factory(params.url).run_script(params.script)

    registry.register_tool(Tool(
        name="codebaseNpmScriptTool",
        description="Run npm scripts (lint or format) in the project root and return their output.",
        parameters=NpmScriptParams,
        handler=handler,
    ))
