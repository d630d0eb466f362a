"""Unit tests for the tool registry."""

import pytest

from auraflow.errors import ToolExecutionFailed, ToolNotFound
from auraflow.tools import ToolRegistry, create_default_registry


class TestToolRegistry:
    """Tests for ToolRegistry."""

    def test_register_and_lookup(self, tool_registry):
        assert tool_registry.has("echo")
        assert tool_registry.get("echo").name == "echo"
        assert tool_registry.get("missing") is None
        assert tool_registry.names() == ["echo", "broken"]
        assert len(tool_registry.list_all()) == 2

    def test_duplicate_rejected(self, tool_registry):
        with pytest.raises(ValueError, match="already registered"):
            tool_registry.register(tool_registry.get("echo"))

    def test_nameless_tool_rejected(self):
        with pytest.raises(ValueError):
            ToolRegistry().register(object())

    def test_definition(self, tool_registry):
        definition = tool_registry.definition("echo")

        assert definition.name == "echo"
        assert definition.parameters["text"].type == "string"
        assert definition.required == ["text"]

    def test_definition_unknown(self, tool_registry):
        with pytest.raises(ToolNotFound):
            tool_registry.definition("missing")

    def test_definitions_skip_unknown_names(self, tool_registry):
        definitions = tool_registry.definitions(["missing", "echo"])

        assert [d.name for d in definitions] == ["echo"]

    @pytest.mark.asyncio
    async def test_execute(self, tool_registry):
        result = await tool_registry.execute("echo", {"text": "hi"})

        assert result.success
        assert result.data == "hi"

    @pytest.mark.asyncio
    async def test_execute_unknown(self, tool_registry):
        with pytest.raises(ToolNotFound):
            await tool_registry.execute("missing", {})

    @pytest.mark.asyncio
    async def test_execute_wraps_exceptions(self, tool_registry):
        with pytest.raises(ToolExecutionFailed, match="disk on fire"):
            await tool_registry.execute("broken", {})


class TestDefaultRegistry:
    """Tests for the built-in tool set."""

    def test_builtin_tools(self, tmp_path):
        registry = create_default_registry(output_dir=str(tmp_path))

        assert registry.names() == ["web_search", "file_system"]
        assert registry.definition("web_search").required == ["query"]
        assert registry.definition("file_system").parameters["action"].enum == [
            "create",
            "read",
            "append",
            "delete",
            "list",
        ]
