from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from ariadne import gql
from hypothesis import strategies as st
from hypothesis.strategies import composite

from gqlscan.scan import ScannableSchema, build_scannable_schema
from gqlscan.typegraph import TypeGraph, load_type_graph

SCALAR_TYPES = ["String", "Int", "Float", "Boolean", "ID"]
TYPE_WRAPPERS = ["{}", "{}!", "[{}]", "[{}!]", "[{}]!", "[{}!]!"]


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    VEHICLE_SCHEMA: Path = TESTS_DATA_DIR / "vehicle.graphql"
    VEHICLE_QUERY: Path = TESTS_DATA_DIR / "vehicle.query.graphql"
    UNION_SCHEMA: Path = TESTS_DATA_DIR / "union.graphql"
    SCAN_CONFIG: Path = TESTS_DATA_DIR / "scan.yaml"


APPLE_SCHEMA = gql(
    """
    type Query {
        a: Apple
    }

    type Apple {
        s: String
    }
    """
)

CYCLIC_SCHEMA = gql(
    """
    type Query {
        a: A
    }

    type A {
        b: B
        name: String
    }

    type B {
        a: A!
        self: B
    }
    """
)


@pytest.fixture(scope="module")
def vehicle_graph() -> TypeGraph:
    assert TestSchemaData.VEHICLE_SCHEMA.exists(), f"Missing test file: {TestSchemaData.VEHICLE_SCHEMA}"
    return load_type_graph(TestSchemaData.VEHICLE_SCHEMA)


@pytest.fixture(scope="module")
def vehicle_scannable() -> ScannableSchema:
    return build_scannable_schema(TestSchemaData.VEHICLE_SCHEMA.read_text())


@pytest.fixture(scope="module")
def apple_scannable() -> ScannableSchema:
    return build_scannable_schema(APPLE_SCHEMA)


@composite
def random_schema_strategy(draw: Callable[[st.SearchStrategy[Any]], Any]) -> str:
    """Generate a valid SDL string of object types that reference each other, cycles included."""
    num_types = draw(st.integers(min_value=1, max_value=5))
    type_names = [f"T{i}" for i in range(num_types)]
    targets = type_names + SCALAR_TYPES

    definitions = []
    for type_name in type_names:
        num_fields = draw(st.integers(min_value=1, max_value=4))
        fields = []
        for i in range(num_fields):
            target = draw(st.sampled_from(targets))
            wrapper = draw(st.sampled_from(TYPE_WRAPPERS))
            fields.append(f"f{i}: {wrapper.format(target)}")
        definitions.append(f"type {type_name} {{ {' '.join(fields)} }}")

    query_fields = " ".join(f"{name.lower()}: {name}" for name in type_names)
    return f"type Query {{ {query_fields} }}\n" + "\n".join(definitions)
