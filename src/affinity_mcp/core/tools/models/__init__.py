"""Tool-related data models."""

from .models import ToolDefinition

__all__ = ["ToolDefinition"]
