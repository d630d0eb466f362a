"""Exception taxonomy for AuraFlow.

Only ``ProviderError`` subclasses escape ``Agent.run``. Tool, delegation and
memory failures are recovered inside the run loop and rendered as inline text.
"""

from enum import Enum
from typing import Optional


class AuraFlowError(Exception):
    """Base class for all AuraFlow errors."""

    pass


class ProviderErrorKind(str, Enum):
    """Closed set of generation provider failure causes."""

    AUTH = "auth"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVER = "server"
    EMPTY = "empty"
    UNKNOWN = "unknown"


class ProviderError(AuraFlowError):
    """Generation provider failure.

    Attributes:
        kind: Classified failure cause
        provider: Provider name that failed
        status_code: HTTP status code, if the provider reported one
    """

    kind: ProviderErrorKind = ProviderErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class ProviderAuthError(ProviderError):
    """Invalid, expired or missing API key."""

    kind = ProviderErrorKind.AUTH


class ProviderRateLimited(ProviderError):
    """Provider rejected the request because of rate limiting."""

    kind = ProviderErrorKind.RATE_LIMITED


class ProviderModelNotFound(ProviderError):
    """Configured model does not exist or is not available for the key."""

    kind = ProviderErrorKind.NOT_FOUND


class ProviderServerError(ProviderError):
    """Provider-side server failure."""

    kind = ProviderErrorKind.SERVER


class ProviderEmptyResponse(ProviderError):
    """Provider returned neither text nor tool calls."""

    kind = ProviderErrorKind.EMPTY


PROVIDER_ERRORS: dict[ProviderErrorKind, type[ProviderError]] = {
    ProviderErrorKind.AUTH: ProviderAuthError,
    ProviderErrorKind.NOT_FOUND: ProviderModelNotFound,
    ProviderErrorKind.RATE_LIMITED: ProviderRateLimited,
    ProviderErrorKind.SERVER: ProviderServerError,
    ProviderErrorKind.EMPTY: ProviderEmptyResponse,
    ProviderErrorKind.UNKNOWN: ProviderError,
}


class ToolError(AuraFlowError):
    """Base class for tool failures."""

    pass


class ToolNotFound(ToolError):
    """No tool is registered under the requested name."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Tool '{tool_name}' not found")
        self.tool_name = tool_name


class ToolExecutionFailed(ToolError):
    """A registered tool raised while executing."""

    def __init__(self, tool_name: str, message: str) -> None:
        super().__init__(message)
        self.tool_name = tool_name


class SubAgentNotFound(AuraFlowError):
    """A delegation named a sub-agent the parent does not declare."""

    def __init__(self, sub_agent_id: str) -> None:
        super().__init__(f"Sub-agent {sub_agent_id} not found")
        self.sub_agent_id = sub_agent_id


class MemoryUnavailable(AuraFlowError):
    """Memory backend is misconfigured or unreachable."""

    pass


class ConfigError(AuraFlowError):
    """Invalid configuration."""

    pass


class WorkflowConfigError(ConfigError):
    """Workflow references agents or steps that do not resolve."""

    pass
