"""Workflow execution engine for AuraFlow.

A workflow is a list of root agents plus a list of steps. Steps run
sequentially on one shared Context, so later agents see everything earlier
agents produced.
"""

import time
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..agent import Agent
from ..config.loader import load_workflow_config
from ..config.schemas import WorkflowConfig
from ..errors import WorkflowConfigError
from ..llm import ProviderFactory
from ..memory import MemoryProvider, create_memory_provider
from ..models import Context, MemoryEntry, Message
from ..tools import ToolInvoker, ToolRegistry, create_default_registry
from ..utils.logging import get_logger, log_context

logger = get_logger(__name__)


class WorkflowResult(BaseModel):
    """Result of one workflow execution."""

    workflow_id: str = Field(..., description="Workflow execution ID")
    outputs: dict[str, Any] = Field(default_factory=dict, description="Step outputs by key")
    final_output: str = Field("", description="Output of the last step")
    messages: list[Message] = Field(default_factory=list, description="Full execution history")
    duration_seconds: float = Field(0.0, description="Wall-clock duration")


class WorkflowRunner:
    """Runs a configured workflow.

    Usage:
        runner = WorkflowRunner.from_file("workflow.yaml")
        result = await runner.run()
        print(result.final_output)
    """

    def __init__(
        self,
        config: WorkflowConfig,
        provider_factory: Optional[ProviderFactory] = None,
        tool_registry: Optional[ToolRegistry] = None,
        memory: Optional[MemoryProvider] = None,
    ) -> None:
        """Initialize the runner and build the agent trees.

        Args:
            config: Workflow configuration
            provider_factory: Shared provider factory (built from config.llm if None)
            tool_registry: Tool registry (built-in tools if None)
            memory: Memory provider (built from config.memory if None)

        Raises:
            WorkflowConfigError: If a step references an unknown agent
            MemoryUnavailable: If the configured memory backend cannot be built
        """
        self.config = config
        self.provider_factory = provider_factory or ProviderFactory(config.llm)

        if tool_registry is None:
            tool_registry = create_default_registry(
                output_dir=config.tools.output_dir,
                search_max_results=config.tools.search_max_results,
                search_region=config.tools.search_region,
            )
        self.tool_invoker = ToolInvoker(tool_registry, search_max_results=config.tools.search_max_results)
        self.memory = memory if memory is not None else create_memory_provider(config.memory)

        self.agents: dict[str, Agent] = {
            agent_config.id: Agent.from_config(
                agent_config,
                tool_invoker=self.tool_invoker,
                provider_factory=self.provider_factory,
                options=config.options,
            )
            for agent_config in config.agents
        }

        for step in config.steps:
            if step.agent not in self.agents:
                raise WorkflowConfigError(f"Step references unknown agent: {step.agent}")

    @classmethod
    def from_file(cls, file_path: str | Path, **kwargs: Any) -> "WorkflowRunner":
        """Create a runner from a workflow file.

        Args:
            file_path: YAML or JSON workflow file
            **kwargs: Passed to the constructor

        Returns:
            WorkflowRunner instance
        """
        return cls(load_workflow_config(file_path), **kwargs)

    async def run(self, context: Optional[Context] = None) -> WorkflowResult:
        """Execute every step in order.

        Args:
            context: Context to run in (a fresh one bound to the memory provider if None)

        Returns:
            WorkflowResult

        Raises:
            ProviderError: If generation fails in any step
        """
        if context is None:
            context = Context(memory=self.memory)

        with log_context(workflow_id=context.workflow_id, session_id=context.session_id):
            start = time.monotonic()
            logger.info(f"Workflow {self.config.id} started (execution {context.workflow_id})")

            final_output = ""
            for index, step in enumerate(self.config.steps):
                step_id = step.id or f"step_{index + 1}"
                agent = self.agents[step.agent]

                if step.task:
                    context.add_message("user", step.task)

                logger.info(f"Step {step_id}: running agent {agent.id}")
                output = await agent.run(context)

                context.add_message(agent.id, output)
                context.set_output(step.output_key or step_id, output)
                await self._remember(context, agent.id, index, output)
                final_output = output

            duration = time.monotonic() - start
            logger.info(f"Workflow {self.config.id} completed in {duration:.2f}s")

        return WorkflowResult(
            workflow_id=context.workflow_id,
            outputs=dict(context.outputs),
            final_output=final_output,
            messages=context.get_messages(),
            duration_seconds=duration,
        )

    async def _remember(self, context: Context, agent_id: str, step: int, content: str) -> None:
        if context.memory is None:
            return
        entry = MemoryEntry(agent_id=agent_id, workflow_id=context.workflow_id, step=step, content=content)
        try:
            await context.memory.save(entry)
        except Exception as e:
            logger.warning(f"Failed to save memory for agent {agent_id}: {e}")
