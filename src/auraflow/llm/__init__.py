"""Generation gateway for AuraFlow.

One ``GenerationProvider`` implementation per vendor; the agent run loop only
depends on the abstract contract.
"""

from .base import GenerationProvider
from .factory import ProviderFactory, create_provider

__all__ = [
    "GenerationProvider",
    "ProviderFactory",
    "create_provider",
]
