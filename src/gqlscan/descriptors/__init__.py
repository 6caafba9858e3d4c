"""Resolver descriptors derived from a type graph, for code emission."""

from .deriver import derive_descriptors, descriptors_to_json, to_type_expression
from .models import ArgumentPlan, FieldPlan, Implement, ResolverDescriptor

__all__ = [
    "ArgumentPlan",
    "FieldPlan",
    "Implement",
    "ResolverDescriptor",
    "derive_descriptors",
    "descriptors_to_json",
    "to_type_expression",
]
