"""Tool schema generation and validation."""

from .schema_validator import SchemaValidator
from .tool_param_factory import ToolParameterFactory, FieldDefinition

__all__ = ["SchemaValidator", "ToolParameterFactory", "FieldDefinition"]
