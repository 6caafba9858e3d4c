import json
from pathlib import Path
from typing import cast

import pytest
from graphql import build_schema
from hypothesis import given, settings

from gqlscan.errors import UnsupportedTypeKindError
from gqlscan.typegraph import (
    EnumType,
    ListOf,
    Nullable,
    ObjectType,
    Scalar,
    TypeGraph,
    build_type_graph,
    build_type_graph_from_schema,
    introspect_schema,
    load_introspection,
    load_type_graph,
    parse_introspection,
)
from gqlscan.typegraph.models import named_type, type_to_sdl, unwrap_nullable
from gqlscan.utils.schema_loader import load_schema
from tests.conftest import APPLE_SCHEMA, CYCLIC_SCHEMA, TestSchemaData, random_schema_strategy


def graph_for(schema_str: str) -> TypeGraph:
    return build_type_graph_from_schema(build_schema(schema_str))


class TestNullability:
    def test_nullable_scalar_is_boxed(self) -> None:
        graph = graph_for("type Query { a: Int }")
        assert graph.field_type("Query", "a") == Nullable(Scalar("Int"))

    def test_non_null_scalar_is_not_boxed(self) -> None:
        graph = graph_for("type Query { a: Int! }")
        assert graph.field_type("Query", "a") == Scalar("Int")

    def test_nullable_list_of_nullable_elements(self) -> None:
        graph = graph_for("type Query { a: [String] }")
        assert graph.field_type("Query", "a") == Nullable(ListOf(Nullable(Scalar("String"))))

    def test_non_null_list_of_non_null_elements(self) -> None:
        graph = graph_for("type Query { a: [String!]! }")
        assert graph.field_type("Query", "a") == ListOf(Scalar("String"))

    def test_root_types_are_always_nullable(self) -> None:
        graph = graph_for(APPLE_SCHEMA)
        assert all(isinstance(root, Nullable) for root in graph.roots)

    def test_arguments_are_nullable_by_default(self) -> None:
        graph = graph_for("type Query { a(x: Int, y: String!): Int }")
        arguments = cast(ObjectType, graph.object_type("Query")).fields["a"].arguments
        assert [argument.name for argument in arguments] == ["x", "y"]
        assert arguments[0].type == Nullable(Scalar("Int"))
        assert arguments[1].type == Scalar("String")


class TestIdentity:
    def test_cross_reference_is_the_root_node(self) -> None:
        graph = graph_for(APPLE_SCHEMA)
        apple_root = unwrap_nullable(graph.root("Apple"))
        assert unwrap_nullable(graph.field_type("Query", "a")) is apple_root
        assert graph.atoms["Apple"] is apple_root

    def test_mutual_recursion_terminates_with_shared_nodes(self) -> None:
        graph = graph_for(CYCLIC_SCHEMA)
        a = graph.object_type("A")
        b = graph.object_type("B")
        assert a is not None and b is not None

        assert unwrap_nullable(a.fields["b"].return_type) is b
        assert b.fields["a"].return_type is a
        assert unwrap_nullable(b.fields["self"].return_type) is b
        assert unwrap_nullable(cast(ObjectType, graph.object_type("Query")).fields["a"].return_type) is a

    def test_repr_of_cyclic_node_does_not_recurse(self) -> None:
        graph = graph_for(CYCLIC_SCHEMA)
        assert repr(graph.object_type("A")) == "ObjectType(type A)"
        assert "ObjectType(type B)" in repr(graph.root("B"))

    def test_scalars_are_interned(self) -> None:
        graph = graph_for("type Query { a: String b: String! }")
        query = cast(ObjectType, graph.object_type("Query"))
        assert unwrap_nullable(query.fields["a"].return_type) is query.fields["b"].return_type
        assert graph.atoms["String"] is query.fields["b"].return_type

    def test_each_build_gets_its_own_registry(self) -> None:
        first = graph_for(APPLE_SCHEMA)
        second = graph_for(APPLE_SCHEMA)
        assert first.object_type("Apple") is not second.object_type("Apple")


class TestKinds:
    def test_vehicle_schema(self, vehicle_graph: TypeGraph) -> None:
        vehicle = vehicle_graph.object_type("Vehicle")
        node = vehicle_graph.object_type("Node")
        assert vehicle is not None and node is not None

        assert vehicle.implements == ["Node"]
        assert not vehicle.is_interface
        assert node.is_interface
        assert list(vehicle.fields) == ["id", "speed", "status", "doors", "owner"]

    def test_enum_values_keep_declaration_order(self, vehicle_graph: TypeGraph) -> None:
        status = vehicle_graph.field_type("Vehicle", "status")
        assert status == Nullable(EnumType(values=("PARKED", "MOVING", "SERVICE"), name="VehicleStatus"))

    def test_input_object_fields_are_resolved(self, vehicle_graph: TypeGraph) -> None:
        vehicles = cast(ObjectType, vehicle_graph.object_type("Query")).fields["vehicles"]
        first, filter_ = vehicles.arguments

        assert first.default_value == "10"
        assert first.type == Nullable(Scalar("Int"))

        vehicle_filter = unwrap_nullable(filter_.type)
        assert vehicle_filter is vehicle_graph.object_type("VehicleFilter")
        assert isinstance(vehicle_filter, ObjectType)
        assert list(vehicle_filter.fields) == ["status", "minSpeed"]
        assert vehicle_filter.fields["minSpeed"].return_type == Nullable(Scalar("Float"))

    def test_custom_scalar_is_a_root(self, vehicle_graph: TypeGraph) -> None:
        assert vehicle_graph.root("DateTime") == Nullable(Scalar("DateTime"))

    def test_builtin_and_introspection_types_are_not_roots(self, vehicle_graph: TypeGraph) -> None:
        root_names = {getattr(unwrap_nullable(root), "name", None) for root in vehicle_graph.roots}
        assert "String" not in root_names
        assert "Boolean" not in root_names
        assert not any(name and name.startswith("__") for name in root_names)

    def test_list_of_objects(self, vehicle_graph: TypeGraph) -> None:
        doors = vehicle_graph.field_type("Vehicle", "doors")
        assert named_type(doors) is vehicle_graph.object_type("Door")
        assert type_to_sdl(doors) == "[Door]"
        assert type_to_sdl(vehicle_graph.field_type("Query", "vehicles")) == "[Vehicle!]!"


class TestUnsupportedKinds:
    def test_union_fails_the_build(self) -> None:
        with pytest.raises(UnsupportedTypeKindError, match="UNION"):
            load_type_graph(TestSchemaData.UNION_SCHEMA)

    def test_unknown_kind_fails_the_build(self) -> None:
        types = parse_introspection([{"kind": "WIDGET", "name": "Thing"}])
        with pytest.raises(UnsupportedTypeKindError) as exc_info:
            build_type_graph(types)
        assert exc_info.value.kind == "WIDGET"
        assert exc_info.value.type_name == "Thing"


class TestIntrospectionInput:
    TYPES = [
        {
            "kind": "OBJECT",
            "name": "Query",
            "fields": [{"name": "a", "args": [], "type": {"kind": "OBJECT", "name": "Apple", "ofType": None}}],
            "interfaces": [],
        },
        {
            "kind": "OBJECT",
            "name": "Apple",
            "fields": [{"name": "s", "args": [], "type": {"kind": "SCALAR", "name": "String", "ofType": None}}],
            "interfaces": [],
        },
        {"kind": "SCALAR", "name": "String"},
        {"kind": "OBJECT", "name": "__Hidden", "fields": []},
    ]

    def test_references_are_resolved_by_name(self) -> None:
        graph = build_type_graph(parse_introspection(self.TYPES))

        root_reprs = [repr(unwrap_nullable(root)) for root in graph.roots]
        assert root_reprs == ["ObjectType(type Query)", "ObjectType(type Apple)"]
        apple = graph.object_type("Apple")
        assert apple is not None
        assert apple.fields["s"].return_type == Nullable(Scalar("String"))
        assert unwrap_nullable(graph.field_type("Query", "a")) is apple

    @pytest.mark.parametrize(
        "document",
        [
            {"__schema": {"types": TYPES}},
            {"data": {"__schema": {"types": TYPES}}},
            TYPES,
        ],
    )
    def test_accepted_document_shapes(self, document: object) -> None:
        types = parse_introspection(document)  # type: ignore[arg-type]
        assert [type_.name for type_ in types] == ["Query", "Apple", "String", "__Hidden"]

    def test_document_without_types_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="__schema.types"):
            parse_introspection({"data": {}})

    def test_saved_document(self, tmp_path: Path) -> None:
        path = tmp_path / "introspection.json"
        path.write_text(json.dumps({"data": {"__schema": {"types": self.TYPES}}}))

        graph = build_type_graph(load_introspection(path))

        assert graph.object_type("Apple") is not None

    def test_schema_introspection_lists_all_types(self) -> None:
        types = introspect_schema(load_schema(TestSchemaData.VEHICLE_SCHEMA))
        assert {type_.name for type_ in types} >= {"Query", "Vehicle", "VehicleStatus", "DateTime", "__Schema"}


@settings(max_examples=50, deadline=None)
@given(schema_str=random_schema_strategy())
def test_every_named_reference_is_the_registered_node(schema_str: str) -> None:
    graph = graph_for(schema_str)

    for object_type in graph.object_types():
        assert graph.atoms[object_type.name] is object_type
        for field in object_type.fields.values():
            target = named_type(field.return_type)
            if isinstance(target, ObjectType):
                assert graph.object_type(target.name) is target
