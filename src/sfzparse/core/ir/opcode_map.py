"""
Opcode maps with parent inheritance.

Every scope (global, master, group, region) owns an ``OpcodeMap``. A map
holds its own opcodes and a link to the map of the enclosing scope; a key
missing locally is looked up along the parent chain. Ancestor maps are
shared by all of their descendants and are frozen once a descendant
starts reading from them.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from ..errors import BuilderError
from .opcodes import Opcode, OpcodeValue


class OpcodeMap(Mapping[str, Opcode]):
    """Ordered, key-unique opcode mapping with an optional parent."""

    __slots__ = ("_opcodes", "_parent", "_frozen")

    def __init__(self, parent: OpcodeMap | None = None) -> None:
        self._opcodes: dict[str, Opcode] = {}
        self._parent = parent
        self._frozen = False

    @property
    def parent(self) -> OpcodeMap | None:
        return self._parent

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> OpcodeMap:
        """Make the map read-only. Returns the map itself."""
        self._frozen = True
        return self

    def add_opcode(self, opcode: Opcode) -> None:
        """
        Insert an opcode, replacing a local one with the same identity.

        Ancestors are never touched; a key that only exists in a parent is
        shadowed, not overwritten.

        Raises:
            BuilderError: If the map is frozen
        """
        if self._frozen:
            raise BuilderError(f"Cannot add opcode '{opcode.key}' to a frozen map")
        self._opcodes[opcode.key] = opcode

    def __getitem__(self, key: str) -> Opcode:
        opcode = self._opcodes.get(key)
        if opcode is not None:
            return opcode
        if self._parent is not None:
            return self._parent[key]
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if key in self._opcodes:
            return True
        return self._parent is not None and key in self._parent

    def __iter__(self) -> Iterator[str]:
        return iter(self.resolved())

    def __len__(self) -> int:
        return len(self.resolved())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OpcodeMap):
            return NotImplemented
        return self._opcodes == other._opcodes and self._parent == other._parent

    def __hash__(self) -> int:
        if not self._frozen:
            raise TypeError("unhashable type: OpcodeMap that is not frozen")
        return hash((frozenset(self._opcodes.items()), self._parent))

    def __repr__(self) -> str:
        keys = ", ".join(self._opcodes)
        return f"OpcodeMap([{keys}], parent={'yes' if self._parent else 'no'})"

    def value(self, key: str, default: Any = None) -> OpcodeValue | Any:
        """Get the resolved value for ``key``, or ``default`` if it is not set."""
        opcode = self.get(key)
        if opcode is None:
            return default
        return opcode.value

    def local(self) -> dict[str, Opcode]:
        """Opcodes declared in this scope only."""
        return dict(self._opcodes)

    def resolved(self) -> dict[str, Opcode]:
        """All opcodes visible from this scope, local ones overriding inherited ones."""
        if self._parent is None:
            return dict(self._opcodes)
        opcodes = self._parent.resolved()
        opcodes.update(self._opcodes)
        return opcodes

    def ancestors(self) -> Iterator[OpcodeMap]:
        """Yield parent maps from the closest to the root."""
        parent = self._parent
        while parent is not None:
            yield parent
            parent = parent.parent
