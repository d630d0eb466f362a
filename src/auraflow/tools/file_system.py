"""Sandboxed file system tool for AuraFlow.

All paths resolve inside a fixed output root (``workflow_outputs`` by default).
"""

from pathlib import Path
from typing import Any

from .result import ToolResult

ACTIONS = ("write", "create_dir", "read", "append", "delete", "list")

# Argument names models use for the target path, in lookup order
PATH_ALIASES = ("filePath", "filename", "destination")

# Argument names models use for the operation, in lookup order
ACTION_ALIASES = ("operation", "action", "command")


class FileSystemTool:
    """Tool for creating, reading and managing files in the output root."""

    def __init__(self, root: str | Path = "workflow_outputs") -> None:
        self.root = Path(root)

    @property
    def name(self) -> str:
        return "file_system"

    @property
    def description(self) -> str:
        return f"Create, read, and manage files in the {self.root.name} directory."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": ["create", "read", "append", "delete", "list"],
                    "description": "The file operation to perform",
                },
                "filePath": {
                    "type": "string",
                    "description": f"Path to the file (relative to {self.root.name})",
                },
                "content": {
                    "type": "string",
                    "description": "Content to write (for create/append actions)",
                },
            },
            "required": ["action", "filePath"],
        }

    @staticmethod
    def normalize_params(params: dict[str, Any]) -> dict[str, Any]:
        """Reshape loosely formatted arguments into ``action`` + ``path``.

        ``create`` becomes ``write`` when content is supplied and
        ``create_dir`` otherwise. ``filePath``, ``filename`` and
        ``destination`` are accepted as aliases for ``path``.

        Args:
            params: Raw arguments, optionally nested under "params"

        Returns:
            Normalized arguments
        """
        nested = params.get("params")
        tool_params = dict(nested) if isinstance(nested, dict) else dict(params)

        action = next((params[key] for key in ACTION_ALIASES if params.get(key)), None)
        if action == "create":
            action = "write" if tool_params.get("content") else "create_dir"

        if not tool_params.get("path"):
            tool_params["path"] = next((tool_params[key] for key in PATH_ALIASES if tool_params.get(key)), None)

        for key in (*ACTION_ALIASES, *PATH_ALIASES, "params"):
            tool_params.pop(key, None)
        tool_params["action"] = action
        return tool_params

    def _resolve(self, path: str) -> Path:
        root = self.root.resolve()
        target = (root / path).resolve()
        # Raises ValueError when the target escapes the root
        target.relative_to(root)
        return target

    async def execute(self, **kwargs) -> ToolResult:
        """Perform a file operation.

        Args:
            action: One of write, create_dir, read, append, delete, list
            path: Path relative to the output root
            content: Content for write/append

        Returns:
            ToolResult describing the outcome
        """
        action = kwargs.get("action")
        path = kwargs.get("path") or ""
        content = kwargs.get("content")

        if action not in ACTIONS:
            return ToolResult.failure(f"Unsupported action: {action}")
        if not path and action != "list":
            return ToolResult.failure("Path parameter is required")

        try:
            target = self._resolve(path or ".")
        except ValueError:
            return ToolResult.failure(f"Access denied: path outside {self.root}")

        try:
            if action == "write":
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content or "", encoding="utf-8")
                return ToolResult(success=True, data=f"Wrote {len(content or '')} characters to {path}")

            if action == "append":
                target.parent.mkdir(parents=True, exist_ok=True)
                with open(target, "a", encoding="utf-8") as f:
                    f.write(content or "")
                return ToolResult(success=True, data=f"Appended {len(content or '')} characters to {path}")

            if action == "create_dir":
                target.mkdir(parents=True, exist_ok=True)
                return ToolResult(success=True, data=f"Created directory {path}")

            if action == "read":
                if not target.is_file():
                    return ToolResult.failure(f"File not found: {path}")
                return ToolResult.from_string(target.read_text(encoding="utf-8"))

            if action == "delete":
                if target.is_file():
                    target.unlink()
                elif target.is_dir():
                    target.rmdir()
                else:
                    return ToolResult.failure(f"Path not found: {path}")
                return ToolResult(success=True, data=f"Deleted {path}")

            # list
            if not target.exists():
                return ToolResult(success=True, data=[])
            if not target.is_dir():
                return ToolResult.failure(f"Not a directory: {path}")
            entries = [
                {
                    "name": entry.name,
                    "type": "directory" if entry.is_dir() else "file",
                    "size": entry.stat().st_size if entry.is_file() else None,
                }
                for entry in sorted(target.iterdir())
            ]
            return ToolResult(success=True, data=entries)

        except PermissionError:
            return ToolResult.failure(f"Permission denied: {path}")
        except UnicodeDecodeError:
            return ToolResult.failure(f"File is not valid UTF-8 text: {path}")
        except OSError as e:
            return ToolResult.failure(f"File operation failed: {e}")
