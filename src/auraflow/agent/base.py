"""Agent run loop for AuraFlow.

An agent runs in one of two modes:

- tool-calling mode, when it declares tools and has a tool invoker: the
  provider may answer with text or with tool calls, which are executed and
  returned as formatted text;
- delegation mode otherwise: the provider answers with text, which may carry
  a ``DELEGATE_TO`` instruction handing a task to one of the sub-agents.

Only provider failures escape ``run``; every other failure is rendered inline.
"""

import json
from typing import Optional, Sequence

from ..config.schemas import MAX_TOOL_ITERATIONS, AgentConfig, AgentOptions
from ..errors import SubAgentNotFound
from ..llm import GenerationProvider, ProviderFactory
from ..memory import MemoryAugmentor
from ..models import Context, GenerationResponse, ToolCall
from ..tools import ToolInvoker
from ..utils.logging import get_logger
from .delegation import PlainText, parse_output
from .prompt import build_follow_up_prompt, build_prompt, build_tool_feedback_prompt

logger = get_logger(__name__)

NO_RESPONSE = "No response generated"


def format_tool_results(calls: Sequence[ToolCall], results: Sequence[str]) -> str:
    """Render executed tool calls as one text block.

    Args:
        calls: Executed calls in request order
        results: Serialized results, aligned with calls

    Returns:
        Formatted results
    """
    sections = [
        f"Tool: {call.name}\nArguments: {json.dumps(call.arguments, separators=(',', ':'), ensure_ascii=False)}\nResult: {result}"
        for call, result in zip(calls, results)
    ]
    return "Tool execution results:\n" + "\n---\n".join(sections)


class Agent:
    """An LLM-backed agent with a role, a goal, tools and sub-agents.

    Agents are immutable after construction apart from the lazily created
    generation provider. Sub-agents form a caller-built tree; cycles are not
    detected.
    """

    def __init__(
        self,
        id: str,
        role: str,
        goal: str,
        tools: Optional[Sequence[str]] = None,
        sub_agents: Optional[Sequence["Agent"]] = None,
        tool_invoker: Optional[ToolInvoker] = None,
        provider: Optional[GenerationProvider] = None,
        provider_factory: Optional[ProviderFactory] = None,
        options: Optional[AgentOptions] = None,
        augmentor: Optional[MemoryAugmentor] = None,
    ) -> None:
        """Initialize the agent.

        Args:
            id: Unique agent identifier
            role: Responsibility description
            goal: Objective
            tools: Tool names the agent may request (deduplicated, order kept)
            sub_agents: Agents this agent may delegate to
            tool_invoker: Executes tool calls (tool mode requires one)
            provider: Generation provider to use directly
            provider_factory: Lazily supplies the provider when none is given
            options: Run loop options
            augmentor: Memory augmentor for prompt construction
        """
        self.id = id
        self.role = role
        self.goal = goal
        self.tools: tuple[str, ...] = tuple(dict.fromkeys(tools or ()))
        self.sub_agents: tuple[Agent, ...] = tuple(sub_agents or ())
        self.tool_invoker = tool_invoker
        self.options = options or AgentOptions()
        self.augmentor = augmentor or MemoryAugmentor()
        self._provider = provider
        self._provider_factory = provider_factory

    @classmethod
    def from_config(
        cls,
        config: AgentConfig,
        tool_invoker: Optional[ToolInvoker] = None,
        provider_factory: Optional[ProviderFactory] = None,
        options: Optional[AgentOptions] = None,
    ) -> "Agent":
        """Build an agent tree from configuration.

        All agents in the tree share the tool invoker, provider factory and
        options.

        Args:
            config: Root agent configuration
            tool_invoker: Shared tool invoker
            provider_factory: Shared provider factory
            options: Shared run loop options

        Returns:
            Root Agent
        """
        factory = provider_factory or ProviderFactory()
        return cls(
            id=config.id,
            role=config.role,
            goal=config.goal,
            tools=config.tools,
            sub_agents=[
                cls.from_config(sub, tool_invoker=tool_invoker, provider_factory=factory, options=options)
                for sub in config.sub_agents
            ],
            tool_invoker=tool_invoker,
            provider_factory=factory,
            options=options,
        )

    @property
    def provider(self) -> GenerationProvider:
        if self._provider is None:
            if self._provider_factory is None:
                self._provider_factory = ProviderFactory()
            self._provider = self._provider_factory.get()
        return self._provider

    @property
    def uses_tools(self) -> bool:
        return bool(self.tools) and self.tool_invoker is not None

    def get_sub_agent(self, sub_agent_id: str) -> "Agent":
        """Find a declared sub-agent by exact ID.

        Args:
            sub_agent_id: Sub-agent ID (case-sensitive)

        Returns:
            The sub-agent

        Raises:
            SubAgentNotFound: If no declared sub-agent has the ID
        """
        for sub_agent in self.sub_agents:
            if sub_agent.id == sub_agent_id:
                return sub_agent
        raise SubAgentNotFound(sub_agent_id)

    async def build_prompt(self, context: Context) -> str:
        """Build the prompt for this agent, including retrieved memories.

        Args:
            context: Shared context

        Returns:
            Prompt text
        """
        memory_block = await self.augmentor.augment(self.id, self.role, self.goal, context)
        return build_prompt(
            role=self.role,
            goal=self.goal,
            messages=context.get_messages(),
            sub_agents=self.sub_agents,
            tools=self.tools,
            memory_block=memory_block,
        )

    async def run(self, context: Context, depth: int = 0) -> str:
        """Run the agent to a final textual answer.

        Args:
            context: Shared context for this workflow execution
            depth: Delegation depth of this call (0 for a root agent)

        Returns:
            Final answer, possibly containing inline error markers

        Raises:
            ProviderError: If the generation provider fails
        """
        mode = "tools" if self.uses_tools else "delegation"
        logger.info(f"Agent {self.id} running in {mode} mode (depth {depth})")
        if self.uses_tools:
            return await self._run_with_tools(context)
        return await self._run_with_delegation(context, depth)

    async def _run_with_tools(self, context: Context) -> str:
        definitions = self.tool_invoker.definitions(list(self.tools))
        prompt = await self.build_prompt(context)

        response = None
        captured: Optional[str] = None

        for iteration in range(1, MAX_TOOL_ITERATIONS + 1):
            logger.debug(f"Agent {self.id} tool iteration {iteration}/{MAX_TOOL_ITERATIONS}")

            if definitions:
                response = await self.provider.generate_with_tools(prompt, definitions)
            else:
                response = GenerationResponse.text(await self.provider.generate(prompt))

            if isinstance(response, GenerationResponse) and response.is_tool_calls:
                logger.info(f"Agent {self.id} received {len(response.calls)} tool call(s)")
                for call in response.calls:
                    logger.info(f"Executing tool: {call.name} with args: {call.arguments}")
                results = await self.tool_invoker.invoke_all(response.calls, parallel=self.options.parallel_tools)
                captured = format_tool_results(response.calls, results)
                if not self.options.feed_tool_results:
                    return captured
                prompt = build_tool_feedback_prompt(prompt, captured)
                continue

            if isinstance(response, GenerationResponse) and response.is_text:
                return response.content

            logger.warning(f"Agent {self.id} received an unrecognized response: {type(response).__name__}")
            break
        else:
            logger.warning(f"Agent {self.id} reached the tool iteration limit ({MAX_TOOL_ITERATIONS})")

        return captured or getattr(response, "content", None) or NO_RESPONSE

    async def _run_with_delegation(self, context: Context, depth: int) -> str:
        prompt = await self.build_prompt(context)
        response = await self.provider.generate(prompt)

        parsed = parse_output(response)
        if isinstance(parsed, PlainText):
            return response

        try:
            sub_agent = self.get_sub_agent(parsed.sub_agent_id)
        except SubAgentNotFound as e:
            logger.warning(f"Agent {self.id}: {e}")
            return f"ERROR: {e}. Original response: {response}"

        max_depth = self.options.max_delegation_depth
        if max_depth is not None and depth >= max_depth:
            logger.warning(f"Agent {self.id}: delegation depth limit {max_depth} reached")
            return (
                f"ERROR: Delegation depth limit {max_depth} reached for sub-agent {sub_agent.id}. "
                f"Original response: {response}"
            )

        logger.info(f"Agent {self.id} delegating to {sub_agent.id}: {parsed.task}")
        sub_context = context.spawn_isolated(self.id, parsed.task)
        sub_response = await sub_agent.run(sub_context, depth=depth + 1)

        context.add_message(sub_agent.id, sub_response)
        return await self.provider.generate(build_follow_up_prompt(prompt, parsed.sub_agent_id, sub_response))
