import json
from collections import deque

from gqlscan import log
from gqlscan.config import ScanConfig
from gqlscan.descriptors.models import ArgumentPlan, FieldPlan, Implement, ResolverDescriptor
from gqlscan.typegraph.models import (
    EnumType,
    ListOf,
    Nullable,
    ObjectType,
    Scalar,
    TypeGraph,
    TypeNode,
    named_object_type,
    unwrap_nullable,
)

GRAPHQL_SCALAR_TO_PYTHON = {
    "String": "str",
    "ID": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
}


def to_type_expression(node: TypeNode, config: ScanConfig | None = None) -> str:
    """
    Canonicalize a type reference into the Python annotation used by generated code.

    Objects and interfaces become resolver handles, lists become ``list[...]``
    and nullable references become ``... | None``.

    Args:
        node: The type reference
        config: Optional scan config with custom scalar mappings and resolver suffix

    Returns:
        str: The type expression
    """
    config = config or ScanConfig()

    if isinstance(node, Nullable):
        return f"{to_type_expression(node.inner, config)} | None"
    if isinstance(node, ListOf):
        return f"list[{to_type_expression(node.element, config)}]"
    if isinstance(node, ObjectType):
        return f"{node.name}{config.resolver_suffix}"
    if isinstance(node, EnumType):
        return "str"
    if isinstance(node, Scalar):
        if node.name in GRAPHQL_SCALAR_TO_PYTHON:
            return GRAPHQL_SCALAR_TO_PYTHON[node.name]
        return config.scalars.get(node.name, "Any")

    raise TypeError(f"Not a type node: {node!r}")


def _field_plan(name: str, return_type: TypeNode, arguments: list[ArgumentPlan], config: ScanConfig) -> FieldPlan:
    unwrapped = unwrap_nullable(return_type)
    target = named_object_type(return_type)
    return FieldPlan(
        name=name,
        is_object=isinstance(unwrapped, ObjectType),
        is_list=isinstance(unwrapped, ListOf),
        is_nullable=isinstance(return_type, Nullable),
        has_arguments=bool(arguments),
        arguments=arguments,
        type_expression=to_type_expression(return_type, config),
        target=target.name if target else None,
    )


def derive_descriptors(graph: TypeGraph, config: ScanConfig | None = None) -> list[ResolverDescriptor]:
    """
    Walk the type graph breadth first and describe every object and interface type once.

    Nodes are deduplicated by identity, not by name, so a type reached through
    several fields is described the first time it is dequeued. Field order
    follows declaration order, which makes the output stable across runs.

    Args:
        graph: The type graph to describe
        config: Optional scan config

    Returns:
        list[ResolverDescriptor]: One descriptor per distinct object/interface node
    """
    config = config or ScanConfig()
    descriptors: list[ResolverDescriptor] = []
    visited: set[int] = set()
    queue: deque[TypeNode] = deque(graph.roots)

    while queue:
        node = queue.popleft()

        if isinstance(node, Nullable):
            queue.append(node.inner)
            continue
        if isinstance(node, ListOf):
            queue.append(node.element)
            continue
        if not isinstance(node, ObjectType) or id(node) in visited:
            continue
        visited.add(id(node))

        fields: list[FieldPlan] = []
        for field in node.fields.values():
            arguments = [
                ArgumentPlan(
                    name=argument.name,
                    type_expression=to_type_expression(argument.type, config),
                    default_value=argument.default_value,
                )
                for argument in field.arguments
            ]
            fields.append(_field_plan(field.name, field.return_type, arguments, config))

            queue.append(field.return_type)
            queue.extend(argument.type for argument in field.arguments)

        descriptors.append(
            ResolverDescriptor(
                name=node.name,
                is_interface=node.is_interface,
                implements=[Implement(interface=interface, type=node.name) for interface in node.implements],
                fields=fields,
            )
        )

    log.info(f"Derived {len(descriptors)} resolver descriptors")
    return descriptors


def descriptors_to_json(descriptors: list[ResolverDescriptor]) -> str:
    """Serialize descriptors to a stable JSON document."""
    return json.dumps([descriptor.model_dump() for descriptor in descriptors], indent=2)
