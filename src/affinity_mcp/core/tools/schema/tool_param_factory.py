"""Per-parameter pydantic fields for tool handlers."""

import inspect
from typing import Annotated, Any, Dict, Optional, Tuple, Type, get_args, get_origin

from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

FieldDefinition = Tuple[Any, FieldInfo]


class ToolParameterFactory:
    """
    Builds the ``create_model`` field definitions of one tool handler.

    A parameter is described either inline, with
    ``Annotated[<type>, Field(description=...)]``, or by the field of the same
    name on the tool's request model. An inline description wins. When the
    request model supplies the field, its constraints (bounds, length limits,
    extra schema keys) carry over, so handler signatures only restate names,
    types and defaults.
    """

    def __init__(self, tool_name: str, request_model: Optional[Type[BaseModel]] = None) -> None:
        """
        Args:
            tool_name: Name of the tool, for error reporting.
            request_model: Model whose fields describe the handler's parameters.
        """
        self.tool_name = tool_name
        self.request_model = request_model

    def build_fields(self, signature: inspect.Signature) -> Dict[str, FieldDefinition]:
        """Build one field definition per handler parameter, in signature order.

        Raises:
            ToolValidationError: If a parameter is variadic, untyped or undescribed.
        """
        return {
            name: self.build_field(name, param) for name, param in signature.parameters.items() if name != "self"
        }

    def build_field(self, param_name: str, param: inspect.Parameter) -> FieldDefinition:
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise self._error(f"Parameter '{param_name}' in tool '{self.tool_name}' must be a named parameter.")

        default = param.default if param.default is not inspect.Parameter.empty else ...
        model_field = self._model_field(param_name)
        annotation = param.annotation
        if annotation is inspect.Parameter.empty:
            if model_field is None:
                raise self._error(f"Parameter '{param_name}' in tool '{self.tool_name}' needs a type annotation.")
            annotation = model_field.annotation

        if _inline_description(annotation) is not None:
            return annotation, Field(default=default)

        if model_field is not None and model_field.description:
            if model_field.metadata:
                annotation = Annotated[(annotation, *model_field.metadata)]
            field = Field(
                default=default,
                description=model_field.description,
                json_schema_extra=model_field.json_schema_extra,
            )
            return annotation, field

        raise self._error(
            f"Parameter '{param_name}' in tool '{self.tool_name}' is missing a description.\n"
            f"Usage: {param_name}: Annotated[Type, Field(description='...')] = ..., "
            f"or a described '{param_name}' field on the tool's request model."
        )

    def _model_field(self, param_name: str) -> Optional[FieldInfo]:
        if self.request_model is None:
            return None
        return self.request_model.model_fields.get(param_name)

    @staticmethod
    def _error(msg: str) -> ToolValidationError:
        logger.error(msg)
        return ToolValidationError(msg)


def _inline_description(annotation: Any) -> Optional[str]:
    if get_origin(annotation) is Annotated:
        for metadata in get_args(annotation)[1:]:
            if isinstance(metadata, FieldInfo) and metadata.description:
                return metadata.description
    return None
