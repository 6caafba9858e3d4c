"""Generic, path-recording field resolution.

A ``ScanResolver`` answers every field request of a query executor without
any per-type code: leaves get their zero value back, objects and lists get
freshly synthesized placeholders so the executor keeps descending, and every
request is appended to the session's ``ResolutionRecord`` with its full
dotted path.

Paths are reconstructed in one of two ways. When the caller passes the
``parent_path`` of the handle a field is selected on, the path is that token
plus the field name. Without a token the record is scanned backwards for the
nearest field whose type names the requesting entity; that only holds while
calls arrive one at a time in depth-first order and no selection re-enters a
type already open on the current branch.
"""

import threading
from collections.abc import Mapping
from typing import Any, Protocol, cast

from gqlscan import log
from gqlscan.errors import UnimplementedCombinationError, UnknownObjectFieldError
from gqlscan.resolution.record import RecordEntry, ResolutionRecord
from gqlscan.resolution.values import (
    ObjectHandle,
    OptionalValue,
    SequenceValue,
    Value,
    fresh_instance,
)
from gqlscan.typegraph.models import (
    ListOf,
    Nullable,
    ObjectType,
    TypeGraph,
    TypeNode,
    named_object_type,
    unwrap_nullable,
)


class Resolver(Protocol):
    """The single operation a query executor calls once per requested field."""

    def resolve_field(
        self,
        entity: str,
        field: str,
        arguments: Mapping[str, Any] | None,
        zero: Value,
        *,
        is_object: bool,
        is_list: bool,
        is_nullable: bool,
        parent_path: str | None = None,
    ) -> Value: ...


def _stamp(value: Value | None, path: str) -> None:
    """Set ``path`` on every object handle inside a synthesized value."""
    if isinstance(value, ObjectHandle):
        value.path = path
    elif isinstance(value, OptionalValue):
        _stamp(value.value, path)
    elif isinstance(value, SequenceValue):
        for item in value.items:
            _stamp(item, path)


class ScanResolver:
    """
    Resolver for one query session.

    Calls are serialized on a per-session lock, so the record always grows in
    call order. Use one ``ScanResolver`` per query; the type graph itself can
    be shared by any number of sessions.

    Args:
        graph: The (shared, read-only) type graph of the schema
        record: The session record, a fresh one by default
        zero_values: Placeholder values for custom scalars
    """

    def __init__(
        self,
        graph: TypeGraph,
        record: ResolutionRecord | None = None,
        zero_values: Mapping[str, Any] | None = None,
    ) -> None:
        self.graph = graph
        self.record = record if record is not None else ResolutionRecord()
        self.zero_values = dict(zero_values or {})
        self._lock = threading.Lock()

    def resolve_field(
        self,
        entity: str,
        field: str,
        arguments: Mapping[str, Any] | None,
        zero: Value,
        *,
        is_object: bool,
        is_list: bool,
        is_nullable: bool,
        parent_path: str | None = None,
    ) -> Value:
        """
        Resolve one field occurrence and record its path.

        Args:
            entity: Name of the type the field is selected on
            field: The field name
            arguments: The field's argument values
            zero: The zero placeholder of the field's declared type
            is_object: Whether the field is object-valued
            is_list: Whether the field is list-valued
            is_nullable: Whether the field may be null
            parent_path: Path of the handle the field is selected on ("" for the
                root value); when omitted the record is scanned backwards

        Returns:
            Value: ``zero`` for leaves, a fresh handle for objects, a
            one-element sequence for lists

        Raises:
            UnknownObjectFieldError: If an object-valued field's type is not registered
            UnimplementedCombinationError: If the request cannot be classified
        """
        with self._lock:
            shape = unwrap_nullable(zero.shape)
            self._check(entity, field, shape, is_object, is_list)

            entry = self.record.append(
                ancestor=entity,
                field_name=field,
                arguments=arguments,
                declared_type=zero.shape,
                path=self._path(entity, field, parent_path),
                is_leaf=not (is_object or is_list),
            )
            log.debug(f"Resolved {entry.path} on {entity}")

            # Neither object nor list: the value will never be expanded any further
            if entry.is_leaf:
                return zero

            value: Value
            if is_object:
                value = ObjectHandle(cast(ObjectType, shape))
            else:
                list_shape = cast(ListOf, shape)
                element = fresh_instance(list_shape.element, self.zero_values)
                value = SequenceValue(items=(element,), shape=list_shape)

            _stamp(value, entry.path)
            if is_nullable and isinstance(zero.shape, Nullable):
                return OptionalValue(value=value, shape=zero.shape)
            return value

    def _check(self, entity: str, field: str, shape: TypeNode, is_object: bool, is_list: bool) -> None:
        if is_object and is_list:
            raise UnimplementedCombinationError(entity, field, "field is flagged both object and list")
        if is_object:
            if not isinstance(shape, ObjectType):
                raise UnimplementedCombinationError(entity, field, f"object flag on non-object type {shape!r}")
            if self.graph.object_type(shape.name) is None:
                raise UnknownObjectFieldError(field)
        elif is_list and not isinstance(shape, ListOf):
            raise UnimplementedCombinationError(entity, field, f"list flag on non-list type {shape!r}")

    def _names_entity(self, entry: RecordEntry, entity: str) -> bool:
        target = named_object_type(entry.declared_type)
        if target is None:
            return False
        if target.name == entity:
            return True
        # Fields typed as an interface are continued on the concrete type the executor picked
        if target.is_interface:
            concrete = self.graph.object_type(entity)
            return concrete is not None and target.name in concrete.implements
        return False

    def _path(self, entity: str, field: str, parent_path: str | None) -> str:
        if parent_path is None:
            parent = self.record.latest(lambda entry: self._names_entity(entry, entity))
            parent_path = parent.path if parent else ""
        if not parent_path:
            return field.lower()
        return f"{parent_path}.{field.lower()}"
