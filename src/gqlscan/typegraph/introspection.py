"""Pydantic models for GraphQL introspection type descriptors.

These mirror the ``__Type`` / ``__Field`` / ``__InputValue`` shapes returned by
an introspection query, so that both graphql-core's ``introspection_from_schema``
output and a saved introspection JSON document can be fed to the builder.
"""

import json
from pathlib import Path
from typing import Any

from graphql import GraphQLSchema, introspection_from_schema
from pydantic import BaseModel, ConfigDict, Field

from gqlscan import log
from gqlscan.utils.schema_loader import ensure_query


class IntrospectedEnumValue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class IntrospectedInputValue(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    type: "IntrospectedType"
    default_value: str | None = Field(None, alias="defaultValue")


class IntrospectedField(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    args: list[IntrospectedInputValue] = Field(default_factory=list)
    type: "IntrospectedType"


class IntrospectedType(BaseModel):
    """A full type definition or a type reference.

    References (``{"kind": "OBJECT", "name": "Apple"}``) carry no fields; the
    builder looks their definition up by name.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    kind: str
    name: str | None = None
    of_type: "IntrospectedType | None" = Field(None, alias="ofType")
    fields: list[IntrospectedField] | None = None
    input_fields: list[IntrospectedInputValue] | None = Field(None, alias="inputFields")
    interfaces: list["IntrospectedType"] | None = None
    enum_values: list[IntrospectedEnumValue] | None = Field(None, alias="enumValues")


IntrospectedInputValue.model_rebuild()
IntrospectedField.model_rebuild()
IntrospectedType.model_rebuild()


def parse_introspection(data: dict[str, Any] | list[dict[str, Any]]) -> list[IntrospectedType]:
    """
    Validate introspection data into an ordered list of type descriptors.

    Args:
        data: Either a bare list of ``__Type`` dicts, an introspection result
            (``{"__schema": {...}}``) or a full response (``{"data": {"__schema": {...}}}``)

    Returns:
        list[IntrospectedType]: The types in input order

    Raises:
        ValueError: If the document holds no type list
    """
    if isinstance(data, dict):
        if "data" in data:
            data = data["data"]
        try:
            types = data["__schema"]["types"]
        except (KeyError, TypeError) as e:
            raise ValueError("Introspection document has no '__schema.types' entry") from e
    else:
        types = data

    return [IntrospectedType.model_validate(type_) for type_ in types]


def introspect_schema(schema: GraphQLSchema) -> list[IntrospectedType]:
    """Run graphql-core's introspection over a schema and validate the result."""
    result = introspection_from_schema(ensure_query(schema))
    types = parse_introspection(dict(result))
    log.debug(f"Introspected {len(types)} types")
    return types


def load_introspection(path: Path) -> list[IntrospectedType]:
    """Load a saved introspection JSON document."""
    log.info(f"Loading introspection document: {path}")
    return parse_introspection(json.loads(path.read_text(encoding="utf-8")))
