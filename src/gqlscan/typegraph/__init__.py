"""Type graph construction for GraphQL schemas."""

from .builder import TypeGraphBuilder, build_type_graph, build_type_graph_from_schema, load_type_graph
from .introspection import IntrospectedType, introspect_schema, load_introspection, parse_introspection
from .models import (
    ArgumentDescriptor,
    EnumType,
    FieldDescriptor,
    ListOf,
    Nullable,
    ObjectType,
    Scalar,
    TypeGraph,
    TypeNode,
)

__all__ = [
    "ArgumentDescriptor",
    "EnumType",
    "FieldDescriptor",
    "IntrospectedType",
    "ListOf",
    "Nullable",
    "ObjectType",
    "Scalar",
    "TypeGraph",
    "TypeGraphBuilder",
    "TypeNode",
    "build_type_graph",
    "build_type_graph_from_schema",
    "introspect_schema",
    "load_introspection",
    "load_type_graph",
    "parse_introspection",
]
