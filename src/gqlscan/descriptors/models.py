"""Pydantic models for resolver descriptors handed to code emission."""

from pydantic import BaseModel, Field


class Implement(BaseModel):
    """Maps an object type onto one interface it implements."""

    interface: str
    type: str


class ArgumentPlan(BaseModel):
    name: str
    type_expression: str
    default_value: str | None = None


class FieldPlan(BaseModel):
    """One accessor of a generated resolver."""

    name: str
    is_object: bool
    is_list: bool
    is_nullable: bool
    has_arguments: bool
    arguments: list[ArgumentPlan] = Field(default_factory=list)
    type_expression: str
    target: str | None = None


class ResolverDescriptor(BaseModel):
    """Everything code emission needs to know about one named object or interface type."""

    name: str
    is_interface: bool = False
    implements: list[Implement] = Field(default_factory=list)
    fields: list[FieldPlan] = Field(default_factory=list)
