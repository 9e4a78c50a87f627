from typing import Any, Dict, Set

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

# Keys that only describe the Optional wrapper and are dropped when it is flattened.
_WRAPPER_ONLY_KEYS = {"anyOf", "default", "title"}


class SchemaValidator:
    """
    Helper class for validating and sanitizing the JSON schemas advertised for tools.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.
        Raises ToolValidationError if a cycle is detected.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = (
                            f"Recursive structure detected: {ref}. "
                            "Recursive structures are not allowed in tool inputs."
                        )
                        logger.error(msg)
                        raise ToolValidationError(msg)

                    # Local refs look like #/$defs/MyModel
                    if ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3:
                            def_name = parts[-1]
                            if def_name in defs:
                                check(defs[def_name], path | {ref})
                    return

                for v in node.values():
                    check(v, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up a generated schema before it is advertised to callers.
        Removes $defs, $schema, $id, title.
        Flattens Optional fields (anyOf with null) into the single non-null type,
        keeping the constraints declared on the wrapper.
        Enforces additionalProperties: false for objects.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        for key in ["$defs", "$schema", "$id", "title", "definitions"]:
            new_schema.pop(key, None)

        if "anyOf" in new_schema:
            any_of = new_schema["anyOf"]
            non_null = [x for x in any_of if not (isinstance(x, dict) and x.get("type") == "null")]

            if len(non_null) == 1 and isinstance(non_null[0], dict):
                merged = non_null[0].copy()
                for key, value in new_schema.items():
                    if key in _WRAPPER_ONLY_KEYS:
                        continue
                    # The wrapper's description wins over the inner type's.
                    if key == "description" or key not in merged:
                        merged[key] = value
                return SchemaValidator.sanitize_schema(merged)

        all_of = new_schema.get("allOf")
        if isinstance(all_of, list) and len(all_of) == 1 and isinstance(all_of[0], dict):
            # Older pydantic wraps a described $ref in a single-element allOf.
            merged = all_of[0].copy()
            for key, value in new_schema.items():
                if key != "allOf":
                    merged[key] = value
            return SchemaValidator.sanitize_schema(merged)

        if new_schema.get("type") == "object":
            if "additionalProperties" not in new_schema:
                new_schema["additionalProperties"] = False

        for key, value in new_schema.items():
            if key == "properties" and isinstance(value, dict):
                # Property names are data, not schema keywords: a field may be called "title".
                new_schema[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema
