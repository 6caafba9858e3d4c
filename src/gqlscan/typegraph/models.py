"""Internal representation of a resolved GraphQL type graph.

Named object, interface and input types are shared by identity: every
reference to ``Apple`` anywhere in the graph points at the same ``ObjectType``
instance. Such graphs may be cyclic, so ``ObjectType`` compares by identity and
never walks its fields in ``repr``.
"""

from dataclasses import dataclass, field
from typing import TypeAlias


@dataclass(frozen=True)
class Scalar:
    name: str


@dataclass(frozen=True)
class EnumType:
    values: tuple[str, ...]
    name: str | None = None


@dataclass(frozen=True)
class Nullable:
    inner: "TypeNode"


@dataclass(frozen=True)
class ListOf:
    element: "TypeNode"


@dataclass(frozen=True)
class ArgumentDescriptor:
    name: str
    type: "TypeNode"
    default_value: str | None = None


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    return_type: "TypeNode"
    arguments: tuple[ArgumentDescriptor, ...] = ()


@dataclass(eq=False, repr=False)
class ObjectType:
    """A named object, interface or input object type.

    ``fields`` is filled in by the builder after the node has been registered,
    which is what lets a field refer back to its own type.
    """

    name: str
    is_interface: bool = False
    implements: list[str] = field(default_factory=list)
    fields: dict[str, FieldDescriptor] = field(default_factory=dict)

    def __repr__(self) -> str:
        kind = "interface" if self.is_interface else "type"
        return f"ObjectType({kind} {self.name})"


TypeNode: TypeAlias = Nullable | Scalar | ListOf | ObjectType | EnumType


def unwrap_nullable(node: TypeNode) -> TypeNode:
    """Strip one level of ``Nullable`` boxing, if present."""
    if isinstance(node, Nullable):
        return node.inner
    return node


def named_type(node: TypeNode) -> TypeNode:
    """Strip every ``Nullable`` and ``ListOf`` wrapper."""
    while isinstance(node, Nullable | ListOf):
        node = node.inner if isinstance(node, Nullable) else node.element
    return node


def named_object_type(node: TypeNode) -> ObjectType | None:
    """Return the object type a (possibly wrapped) reference points at, if any."""
    unwrapped = named_type(node)
    if isinstance(unwrapped, ObjectType):
        return unwrapped
    return None


def type_to_sdl(node: TypeNode) -> str:
    """Render a type reference in GraphQL notation, e.g. ``[String!]``."""
    if isinstance(node, Nullable):
        inner = type_to_sdl(node.inner)
        return inner[:-1] if inner.endswith("!") else inner
    if isinstance(node, ListOf):
        return f"[{type_to_sdl(node.element)}]!"
    if isinstance(node, Scalar):
        return f"{node.name}!"
    if isinstance(node, ObjectType):
        return f"{node.name}!"
    if node.name:
        return f"{node.name}!"
    return "enum(" + ", ".join(node.values) + ")!"


@dataclass
class TypeGraph:
    """The resolved roots of a schema plus the registry of canonical named nodes."""

    roots: list[TypeNode]
    atoms: dict[str, ObjectType | Scalar]

    def object_type(self, name: str) -> ObjectType | None:
        atom = self.atoms.get(name)
        if isinstance(atom, ObjectType):
            return atom
        return None

    def root(self, name: str) -> TypeNode:
        """Return the root node (nullable boxed) whose named type is ``name``.

        Raises:
            KeyError: If no root type carries that name
        """
        for node in self.roots:
            inner = unwrap_nullable(node)
            if isinstance(inner, ObjectType | Scalar) and inner.name == name:
                return node
        raise KeyError(name)

    def field_type(self, type_name: str, field_name: str) -> TypeNode:
        """Return the declared return type of ``type_name.field_name``.

        Raises:
            KeyError: If the type or the field is unknown
        """
        object_type = self.object_type(type_name)
        if object_type is None:
            raise KeyError(type_name)
        return object_type.fields[field_name].return_type

    def object_types(self) -> list[ObjectType]:
        return [atom for atom in self.atoms.values() if isinstance(atom, ObjectType)]
