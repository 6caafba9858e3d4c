from collections.abc import Sequence
from pathlib import Path

from graphql import GraphQLSchema

from gqlscan import log
from gqlscan.errors import UnsupportedTypeKindError
from gqlscan.typegraph.introspection import IntrospectedType, introspect_schema
from gqlscan.typegraph.models import (
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
from gqlscan.utils.graphql_type import is_builtin_scalar_type, is_internal_type
from gqlscan.utils.schema_loader import load_schema

OBJECT_KINDS = {"OBJECT", "INTERFACE", "INPUT_OBJECT"}


def _box(node: TypeNode, nullable: bool) -> TypeNode:
    return Nullable(node) if nullable else node


class TypeGraphBuilder:
    """
    Resolves introspected type descriptors into a type graph.

    The atom registry lives on the builder instance, so every build starts from
    an empty registry and nothing is shared between builds.

    Args:
        types: The full, ordered list of introspected types of one schema. Named
            references met while resolving fields are looked up here.
    """

    def __init__(self, types: Sequence[IntrospectedType]) -> None:
        self.types = list(types)
        self.definitions: dict[str, IntrospectedType] = {type_.name: type_ for type_ in self.types if type_.name}
        self.atoms: dict[str, ObjectType | Scalar] = {}

    def build(self) -> TypeGraph:
        """
        Resolve every non-internal, non-builtin type in input order.

        Returns:
            TypeGraph: The root nodes (always nullable) and the completed registry
        """
        roots: list[TypeNode] = []
        for type_ in self.types:
            if not type_.name or is_internal_type(type_.name) or is_builtin_scalar_type(type_.name):
                continue
            # Root types are always nullable in a GraphQL schema
            roots.append(self.resolve(True, type_))

        log.debug(f"Resolved {len(roots)} root types into {len(self.atoms)} atoms")
        return TypeGraph(roots=roots, atoms=dict(self.atoms))

    def resolve(self, nullable: bool, type_: IntrospectedType) -> TypeNode:
        """
        Recursively resolve one introspected type.

        NON_NULL is a boxing around the inner type, so it unboxes and tells the
        inner type its parent was not nullable.

        Args:
            nullable: Whether the reference being resolved may be null
            type_: The introspected type or type reference

        Returns:
            TypeNode: The resolved node, wrapped in ``Nullable`` when ``nullable``

        Raises:
            UnsupportedTypeKindError: For UNION and unknown kinds
        """
        kind = type_.kind

        if kind == "NON_NULL":
            if type_.of_type is None:
                raise UnsupportedTypeKindError(kind, type_.name)
            return self.resolve(False, type_.of_type)

        if kind == "SCALAR":
            return _box(self._resolve_scalar(type_), nullable)

        if kind in OBJECT_KINDS:
            return _box(self._resolve_object(type_), nullable)

        if kind == "LIST":
            if type_.of_type is None:
                raise UnsupportedTypeKindError(kind, type_.name)
            return _box(ListOf(self.resolve(True, type_.of_type)), nullable)

        if kind == "ENUM":
            definition = self._definition(type_)
            values = tuple(value.name for value in definition.enum_values or [])
            return _box(EnumType(values=values, name=definition.name), nullable)

        raise UnsupportedTypeKindError(kind, type_.name)

    def _definition(self, type_: IntrospectedType) -> IntrospectedType:
        if type_.name and type_.name in self.definitions:
            return self.definitions[type_.name]
        return type_

    def _resolve_scalar(self, type_: IntrospectedType) -> Scalar:
        name = type_.name or "invalid scalar"
        atom = self.atoms.get(name)
        if isinstance(atom, Scalar):
            return atom
        scalar = Scalar(name)
        self.atoms[name] = scalar
        return scalar

    def _resolve_object(self, type_: IntrospectedType) -> ObjectType:
        definition = self._definition(type_)
        name = definition.name or ""

        existing = self.atoms.get(name)
        if isinstance(existing, ObjectType):
            return existing

        interfaces = [interface.name for interface in definition.interfaces or [] if interface.name]
        obj = ObjectType(name=name, is_interface=definition.kind == "INTERFACE", implements=interfaces)
        # Registered before its fields are resolved so self and mutual references terminate
        self.atoms[name] = obj

        # INPUT_OBJECT differs from OBJECT only in where the schema allows it, not in shape
        for field in definition.fields or []:
            arguments = tuple(
                ArgumentDescriptor(
                    name=arg.name,
                    type=self.resolve(True, arg.type),
                    default_value=arg.default_value,
                )
                for arg in field.args
            )
            obj.fields[field.name] = FieldDescriptor(
                name=field.name,
                return_type=self.resolve(True, field.type),
                arguments=arguments,
            )

        for input_field in definition.input_fields or []:
            obj.fields[input_field.name] = FieldDescriptor(
                name=input_field.name,
                return_type=self.resolve(True, input_field.type),
            )

        log.debug(f"Resolved {name} with {len(obj.fields)} fields")
        return obj


def build_type_graph(types: Sequence[IntrospectedType]) -> TypeGraph:
    """
    Build a type graph from an ordered sequence of introspected types.

    Args:
        types: Introspected type descriptors, as produced by ``parse_introspection``

    Returns:
        TypeGraph: The resolved graph

    Raises:
        UnsupportedTypeKindError: If any type is a UNION or of an unknown kind;
            no partial graph is returned in that case
    """
    graph = TypeGraphBuilder(types).build()
    log.info(f"Built type graph with {len(graph.roots)} root types")
    return graph


def build_type_graph_from_schema(schema: GraphQLSchema) -> TypeGraph:
    """Introspect a graphql-core schema and build its type graph."""
    return build_type_graph(introspect_schema(schema))


def load_type_graph(schema_paths: Path | list[Path]) -> TypeGraph:
    """Load GraphQL schema files or directories and build their type graph."""
    return build_type_graph_from_schema(load_schema(schema_paths))
