from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from gqlscan.typegraph.models import TypeNode, type_to_sdl


@dataclass(frozen=True)
class RecordEntry:
    """One visited field of a query session."""

    ancestor: str
    field: str
    arguments: Mapping[str, Any]
    declared_type: TypeNode
    path: str
    is_leaf: bool

    def as_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "ancestor": self.ancestor,
            "field": self.field,
            "arguments": dict(self.arguments),
            "type": type_to_sdl(self.declared_type),
            "leaf": self.is_leaf,
        }


@dataclass
class ResolutionRecord:
    """Append-only, ordered log of the fields resolved during one query session.

    Entries are never rewritten or removed once appended.
    """

    _entries: list[RecordEntry] = field(default_factory=list)

    def append(
        self,
        ancestor: str,
        field_name: str,
        arguments: Mapping[str, Any] | None,
        declared_type: TypeNode,
        path: str,
        is_leaf: bool,
    ) -> RecordEntry:
        entry = RecordEntry(
            ancestor=ancestor,
            field=field_name,
            arguments=MappingProxyType(dict(arguments or {})),
            declared_type=declared_type,
            path=path,
            is_leaf=is_leaf,
        )
        self._entries.append(entry)
        return entry

    def latest(self, predicate: Callable[[RecordEntry], bool]) -> RecordEntry | None:
        """Return the most recent entry matching ``predicate``, scanning backwards."""
        for entry in reversed(self._entries):
            if predicate(entry):
                return entry
        return None

    def paths(self) -> list[str]:
        return [entry.path for entry in self._entries]

    def leaf_paths(self) -> list[str]:
        return [entry.path for entry in self._entries if entry.is_leaf]

    def as_list(self) -> list[dict[str, Any]]:
        return [entry.as_dict() for entry in self._entries]

    def __iter__(self) -> Iterator[RecordEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> RecordEntry:
        return self._entries[index]
