"""Generic, path-recording resolution of GraphQL fields."""

from .engine import Resolver, ScanResolver
from .record import RecordEntry, ResolutionRecord
from .values import (
    LeafValue,
    ObjectHandle,
    OptionalValue,
    SequenceValue,
    Value,
    fresh_instance,
    to_python,
    zero_value,
)

__all__ = [
    "LeafValue",
    "ObjectHandle",
    "OptionalValue",
    "RecordEntry",
    "ResolutionRecord",
    "Resolver",
    "ScanResolver",
    "SequenceValue",
    "Value",
    "fresh_instance",
    "to_python",
    "zero_value",
]
