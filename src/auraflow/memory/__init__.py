"""Memory integration for AuraFlow."""

from .augmentor import MemoryAugmentor
from .base import ALL_WORKFLOWS, MemoryProvider
from .factory import create_memory_provider
from .file import FileMemoryProvider
from .search import MemorySearch

__all__ = [
    "ALL_WORKFLOWS",
    "MemoryProvider",
    "MemoryAugmentor",
    "MemorySearch",
    "FileMemoryProvider",
    "create_memory_provider",
]
