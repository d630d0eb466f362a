"""ToolResult class for AuraFlow tools.

This module defines the standardized result returned by every tool.
"""

from typing import Any, Optional


class ToolResult:
    """Result of tool execution.

    Attributes:
        success: Whether the tool execution succeeded
        data: JSON-serializable result data (if successful)
        error: Error message (if failed)
        truncated: Whether text output was truncated due to size limit
    """

    # Maximum text result size (100KB)
    MAX_SIZE = 100 * 1024

    def __init__(
        self,
        success: bool,
        data: Any = None,
        error: Optional[str] = None,
        truncated: bool = False,
    ):
        self.success = success
        self.data = data
        self.error = error
        self.truncated = truncated

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary.

        Returns:
            Dictionary with success and either data or error
        """
        if not self.success:
            return {"success": False, "error": self.error}
        result: dict[str, Any] = {"success": True, "data": self.data}
        if self.truncated:
            result["truncated"] = True
        return result

    @classmethod
    def from_string(cls, content: str, enforce_limit: bool = True) -> "ToolResult":
        """Create a ToolResult from a string, enforcing size limit.

        Args:
            content: The content string
            enforce_limit: Whether to enforce MAX_SIZE limit

        Returns:
            ToolResult with appropriate truncation
        """
        if enforce_limit and len(content.encode("utf-8")) > cls.MAX_SIZE:
            truncated = content.encode("utf-8")[: cls.MAX_SIZE].decode("utf-8", errors="ignore")
            return cls(success=True, data=truncated, truncated=True)
        return cls(success=True, data=content)

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(success=False, error=error)

    def __repr__(self) -> str:
        if self.success:
            return f"ToolResult(success=True, truncated={self.truncated})"
        return f"ToolResult(success=False, error={self.error})"
