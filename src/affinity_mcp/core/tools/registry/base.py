"""Tool registry and schema generation for handler callables."""

import inspect
from typing import Callable, Dict, Any, List, Union, Optional, Type, cast

import jsonref  # type: ignore
from pydantic import BaseModel, create_model

from ..models import ToolDefinition
from ..schema import ToolParameterFactory, SchemaValidator
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    The catalog of tools served by the process.

    The registry is filled once at startup and then frozen. After ``freeze()``
    it is read-only: lookups need no synchronization and the ``tools/list``
    order is the registration order.
    """

    def __init__(self) -> None:
        """Initialize an empty, writable registry."""
        self.tools: Dict[str, ToolDefinition] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "ToolRegistry":
        """Seal the registry against further registration.

        Returns:
            The registry itself, for chaining.
        """
        self._frozen = True
        logger.debug("Tool registry frozen with %d tools.", len(self.tools))
        return self

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition, Callable],
        description: Optional[str] = None,
        func: Optional[Callable] = None,
        parameters: Optional[Dict[str, Any]] = None,
        batch_limit: Optional[int] = None,
        request_model: Optional[Type[BaseModel]] = None,
    ) -> ToolDefinition:
        """
        Register a new tool.

        A tool can be registered from a ready `ToolDefinition`, from individual
        components (name, description, function, parameters), or from a callable
        whose signature and docstring generate the definition.

        Args:
            name_or_tool: Either a `ToolDefinition` object, the name of the tool (str), or a Callable.
            description: What the tool does. Required if `name_or_tool` is a string and parameters are provided.
            func: The handler implementing the tool. Required if `name_or_tool` is a string.
            parameters: The input schema. If None, it is generated from `func`.
            batch_limit: Fan-out limit when the tool runs its items as a batch.
            request_model: Model whose field descriptions and constraints document the handler parameters.

        Returns:
            The registered definition.

        Raises:
            ToolRegistrationError: If the registry is frozen, arguments are incomplete or the tool already exists.
        """
        if self._frozen:
            msg = "Tool registry is frozen; tools can only be registered at startup."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        elif callable(name_or_tool):
            tool = self._generate_tool_definition(
                name_or_tool, description=description, batch_limit=batch_limit, request_model=request_model
            )
        else:
            if func is None:
                raise ToolRegistrationError("If passing name as string, func is required.")

            if parameters is None:
                tool = self._generate_tool_definition(
                    func,
                    name=name_or_tool,
                    description=description,
                    batch_limit=batch_limit,
                    request_model=request_model,
                )
            else:
                if description is None:
                    raise ToolRegistrationError("If passing name and parameters, description is required.")
                tool = ToolDefinition(
                    name=name_or_tool,
                    description=description,
                    func=func,
                    parameters=parameters,
                    batch_limit=batch_limit,
                )

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.debug("Registered tool: '%s'", tool.name)
        return tool

    def list(self) -> List[ToolDefinition]:
        """Return all tool definitions in registration order."""
        return list(self.tools.values())

    def resolve(self, name: str) -> ToolDefinition:
        """Look up a tool by name.

        Args:
            name: The tool name.

        Returns:
            The tool's definition.

        Raises:
            ToolNotFoundError: If no tool with that name exists.
        """
        try:
            return self.tools[name]
        except KeyError:
            raise ToolNotFoundError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self.tools

    def __len__(self) -> int:
        return len(self.tools)

    def _generate_tool_definition(
        self,
        func: Callable,
        name: Optional[str] = None,
        description: Optional[str] = None,
        batch_limit: Optional[int] = None,
        request_model: Optional[Type[BaseModel]] = None,
    ) -> ToolDefinition:
        """Generate a ToolDefinition from a handler callable.

        Args:
            func: The handler to generate a definition for.
            name: Optional name override for the tool.
            description: Optional description override for the tool.
            batch_limit: Fan-out limit for batched tools.
            request_model: Optional model describing the handler parameters.

        Returns:
            A ToolDefinition object containing the tool's metadata and schema.

        Raises:
            ToolValidationError: If the handler is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        signature = inspect.signature(func)
        fields = ToolParameterFactory(tool_name, request_model=request_model).build_fields(signature)

        # create_model expects **field_definitions: Any
        model_name = "".join(part.title() for part in tool_name.replace(".", "_").split("_")) + "Params"
        dynamic_params_model = create_model(model_name, **cast(Dict[str, Any], fields))
        raw_schema = dynamic_params_model.model_json_schema()
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # proxies=False ensures we get a plain dict back, not JsonRef objects;
        # merge_props keeps keywords declared next to a $ref (e.g. a field description)
        parameters_schema = jsonref.replace_refs(raw_schema, proxies=False, merge_props=True)
        parameters_schema = SchemaValidator.sanitize_schema(parameters_schema)

        return ToolDefinition(
            name=tool_name,
            description=description,
            func=func,
            parameters=parameters_schema,
            args_model=dynamic_params_model,
            batch_limit=batch_limit,
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. Callers need a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc
