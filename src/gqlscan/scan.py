"""Run GraphQL queries in scan mode.

graphql-core stays the query executor: it parses, validates and walks the
selection set. Every field it asks for is answered by a ``ScanResolver``, so
the result of a scan is the ``ResolutionRecord`` of the visited fields rather
than the returned data.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from graphql import (
    GraphQLAbstractType,
    GraphQLError,
    GraphQLFieldResolver,
    GraphQLResolveInfo,
    GraphQLSchema,
    execute_sync,
    parse,
    validate,
)

from gqlscan import log
from gqlscan.errors import ScanQueryError
from gqlscan.resolution.engine import ScanResolver
from gqlscan.resolution.record import ResolutionRecord
from gqlscan.resolution.values import ObjectHandle, to_python, zero_value
from gqlscan.typegraph.builder import build_type_graph_from_schema
from gqlscan.typegraph.models import ListOf, Nullable, ObjectType, TypeGraph, unwrap_nullable
from gqlscan.utils.schema_loader import load_schema, load_schema_from_str


@dataclass
class ScannableSchema:
    schema: GraphQLSchema
    graph: TypeGraph


@dataclass
class ScanResult:
    record: ResolutionRecord
    errors: list[str] = field(default_factory=list)

    def paths(self) -> list[str]:
        return self.record.paths()

    def leaf_paths(self) -> list[str]:
        return self.record.leaf_paths()


def build_scannable_schema(schema_str: str) -> ScannableSchema:
    """Build a graphql-core schema from SDL together with its type graph."""
    schema = load_schema_from_str(schema_str)
    return ScannableSchema(schema=schema, graph=build_type_graph_from_schema(schema))


def load_scannable_schema(schema_paths: Path | list[Path]) -> ScannableSchema:
    schema = load_schema(schema_paths)
    return ScannableSchema(schema=schema, graph=build_type_graph_from_schema(schema))


def make_field_resolver(resolver: ScanResolver) -> GraphQLFieldResolver:
    """
    Adapt a ``ScanResolver`` to graphql-core's field resolver signature.

    The declared type of every field is taken from the type graph, so the
    executor's own type objects are never inspected. The source handle of each
    call is passed on as the parent path token, which keeps paths exact even
    when a selection re-enters a type that is already open on its branch.
    """

    def resolve(source: Any, info: GraphQLResolveInfo, **arguments: Any) -> Any:
        # Handles carry the path of the field that produced them; the root value has none
        parent_path = source.path if isinstance(source, ObjectHandle) else ""
        declared = resolver.graph.field_type(info.parent_type.name, info.field_name)
        shape = unwrap_nullable(declared)
        value = resolver.resolve_field(
            info.parent_type.name,
            info.field_name,
            arguments,
            zero_value(declared, resolver.zero_values),
            is_object=isinstance(shape, ObjectType),
            is_list=isinstance(shape, ListOf),
            is_nullable=isinstance(declared, Nullable),
            parent_path=parent_path,
        )
        return to_python(value)

    return resolve


def resolve_placeholder_type(value: Any, info: GraphQLResolveInfo, abstract_type: GraphQLAbstractType) -> str:
    """
    Pick the concrete object type for a handle returned from an interface-typed field.

    Raises:
        GraphQLError: If no object type implements the interface; the executor
            reports it as an error of that field
    """
    if isinstance(value, ObjectHandle) and not value.node.is_interface:
        return value.type_name
    possible_types = info.schema.get_possible_types(abstract_type)
    if not possible_types:
        raise GraphQLError(
            f"Interface '{abstract_type.name}' has no implementing object types,"
            f" the selections under '{info.parent_type.name}.{info.field_name}' cannot be scanned"
        )
    return possible_types[0].name


def scan_query(
    scannable: ScannableSchema,
    query: str,
    variables: Mapping[str, Any] | None = None,
    operation_name: str | None = None,
    zero_values: Mapping[str, Any] | None = None,
) -> ScanResult:
    """
    Execute a query in scan mode and record every field it visits.

    Args:
        scannable: The schema and its type graph
        query: The GraphQL query document
        variables: Variable values for the operation
        operation_name: Operation to run when the document holds several
        zero_values: Placeholder values for custom scalars

    Returns:
        ScanResult: The session record and the per-field errors, if any

    Raises:
        ScanQueryError: If the document does not parse or validate against the schema
    """
    try:
        document = parse(query)
    except GraphQLError as e:
        raise ScanQueryError([e.message]) from e

    validation_errors = validate(scannable.schema, document)
    if validation_errors:
        raise ScanQueryError([error.message for error in validation_errors])

    resolver = ScanResolver(scannable.graph, zero_values=zero_values)
    result = execute_sync(
        scannable.schema,
        document,
        variable_values=dict(variables) if variables else None,
        operation_name=operation_name,
        field_resolver=make_field_resolver(resolver),
        type_resolver=resolve_placeholder_type,
    )

    errors = [error.message for error in result.errors or []]
    if result.data is None and errors and not len(resolver.record):
        # Variable coercion and operation selection fail before any field is visited
        raise ScanQueryError(errors)

    for error in errors:
        log.warning(f"Field error during scan: {error}")

    log.info(f"Scan visited {len(resolver.record)} fields with {len(errors)} error(s)")
    return ScanResult(record=resolver.record, errors=errors)
