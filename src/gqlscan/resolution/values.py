"""Placeholder values built purely from declared type nodes.

A scan never produces real data. Every value it hands back is one of four
shapes, derived from the field's declared ``TypeNode``:

- ``LeafValue``: a scalar or enum placeholder
- ``ObjectHandle``: an empty instance of an object or interface type
- ``SequenceValue``: a list of placeholders
- ``OptionalValue``: a nullable slot, either empty or holding a placeholder
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from gqlscan.typegraph.models import EnumType, ListOf, Nullable, ObjectType, Scalar, TypeNode

SCALAR_ZERO_VALUES: dict[str, Any] = {
    "String": "",
    "ID": "",
    "Int": 0,
    "Float": 0.0,
    "Boolean": False,
}


@dataclass(frozen=True)
class LeafValue:
    value: Any
    shape: Scalar | EnumType


@dataclass(eq=False)
class ObjectHandle:
    """A fresh, empty instance of an object or interface type.

    Handles compare by identity; two handles of the same type are distinct instances.
    ``path`` is the dotted path of the field that produced the handle (empty for
    a root value) and is handed back as the parent token of its sub-fields.
    """

    node: ObjectType
    path: str | None = None

    @property
    def shape(self) -> ObjectType:
        return self.node

    @property
    def type_name(self) -> str:
        return self.node.name

    def __repr__(self) -> str:
        return f"ObjectHandle({self.node.name})"


@dataclass(frozen=True)
class SequenceValue:
    items: tuple["Value", ...]
    shape: ListOf


@dataclass(frozen=True)
class OptionalValue:
    value: "Value | None"
    shape: Nullable

    @property
    def is_empty(self) -> bool:
        return self.value is None


Value: TypeAlias = LeafValue | ObjectHandle | SequenceValue | OptionalValue


def scalar_zero(node: Scalar | EnumType, overrides: Mapping[str, Any] | None = None) -> Any:
    if isinstance(node, EnumType):
        # An empty string is not a member of the enum, the first declared value is
        return node.values[0] if node.values else ""
    if overrides and node.name in overrides:
        return overrides[node.name]
    return SCALAR_ZERO_VALUES.get(node.name, "")


def zero_value(node: TypeNode, overrides: Mapping[str, Any] | None = None) -> Value:
    """
    Build the zero placeholder of a declared type.

    Nullable slots are empty, lists are empty, scalars and enums hold their
    zero and objects are empty handles.

    Args:
        node: The declared type
        overrides: Zero values for custom scalars, keyed by scalar name

    Returns:
        Value: The zero placeholder
    """
    if isinstance(node, Nullable):
        return OptionalValue(value=None, shape=node)
    if isinstance(node, ListOf):
        return SequenceValue(items=(), shape=node)
    if isinstance(node, ObjectType):
        return ObjectHandle(node)
    return LeafValue(value=scalar_zero(node, overrides), shape=node)


def fresh_instance(node: TypeNode, overrides: Mapping[str, Any] | None = None) -> Value:
    """Like ``zero_value`` but nullable slots and lists are filled rather than left empty.

    Lists get exactly one fresh element, so nested lists are filled down to
    their innermost element.
    """
    if isinstance(node, Nullable):
        return OptionalValue(value=fresh_instance(node.inner, overrides), shape=node)
    if isinstance(node, ListOf):
        return SequenceValue(items=(fresh_instance(node.element, overrides),), shape=node)
    return zero_value(node, overrides)


def to_python(value: Value | None) -> Any:
    """
    Unwrap a placeholder into what a GraphQL executor expects.

    Leaves become their raw value, sequences become lists and empty optional
    slots become ``None``. Object handles are kept as they are, so that the
    executor passes them back as the source of their sub-fields.
    """
    if value is None:
        return None
    if isinstance(value, OptionalValue):
        return to_python(value.value)
    if isinstance(value, SequenceValue):
        return [to_python(item) for item in value.items]
    if isinstance(value, LeafValue):
        return value.value
    return value
