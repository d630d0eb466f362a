"""CLI module for AuraFlow."""

from .main import main

__all__ = ["main"]
