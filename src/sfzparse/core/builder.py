"""
Scope resolution for SFZ token streams.

The builder walks header and opcode tokens and keeps a stack of completed
ancestor scopes (global, master, group) plus the scope currently being
filled. Each region scope is emitted exactly once, when the next
structural header (or the end of input) closes it.

Levels:
    0 = <global>, 1 = <master>, 2 = <group>, 3 = <region>

A ``<control>`` header switches opcodes to a separate control map until
the next structural header. A file may skip levels (e.g. go straight
from ``<global>`` to ``<region>``); the skipped scopes are synthesized as
empty pass-through ancestors.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path

from .errors import BuilderError
from .ir import REGION_LEVEL, HeaderKind, Opcode, OpcodeMap
from .lexer import HeaderToken, Token

logger = logging.getLogger(__name__)


class ScopeBuilder:
    """
    Resolves a token stream into one inheriting opcode map per region.

    Attributes:
        base_path: Directory that ``default_path`` is resolved against
        default_path: Resolved default sample search path
        regions: Completed region maps, in the order they were closed
        control_codes: Opcodes declared under ``<control>``
        levels: Completed ancestor scopes, most specific first
        current: Scope being filled (None once finished)
        is_control: Whether opcodes go to ``control_codes``
    """

    def __init__(self, base_path: Path | str = ".") -> None:
        self.base_path = Path(base_path)
        self.default_path = self.base_path
        self.regions: list[OpcodeMap] = []
        self.control_codes = OpcodeMap()
        self.levels: deque[OpcodeMap] = deque()
        # Global scope is implicitly open before any header
        self.current: OpcodeMap | None = OpcodeMap()
        self.is_control = False
        self._auxiliary: HeaderKind | None = None

    @property
    def finished(self) -> bool:
        return self.current is None

    def _current(self) -> OpcodeMap:
        if self.current is None:
            raise BuilderError("Scope builder is already finished")
        return self.current

    def step_to_level(self, level: int) -> None:
        """
        Move the builder to a new scope at ``level``.

        Closes the current region if one is open, drops ancestors deeper
        than ``level`` and opens a fresh scope, synthesizing empty
        intermediate scopes when descending more than one level.
        """
        if not 0 <= level <= REGION_LEVEL:
            raise ValueError(f"Scope level out of range (0..{REGION_LEVEL}): {level}")
        current = self._current()

        if len(self.levels) == REGION_LEVEL:
            self.regions.append(current.freeze())
            logger.debug("Closed region #%d (%d opcodes)", len(self.regions), len(current.local()))

        while len(self.levels) > level:
            self.levels.popleft()

        if len(self.levels) == level:
            parent = self.levels[0] if self.levels else None
            self.current = OpcodeMap(parent)

        while len(self.levels) < level:
            ancestor = self._current().freeze()
            self.levels.appendleft(ancestor)
            self.current = OpcodeMap(ancestor)

        logger.debug("Stepped to scope level %d", level)

    def feed(self, token: Token) -> None:
        """Apply one token."""
        self._current()
        if isinstance(token, HeaderToken):
            self.on_header(token.kind)
        else:
            self.on_opcode(token.opcode)

    def on_header(self, kind: HeaderKind) -> None:
        if kind == HeaderKind.CONTROL:
            self.is_control = True
            self._auxiliary = None
            return
        level = kind.level
        if level is None:
            # Auxiliary sections do not change scope or mode
            self._auxiliary = kind
            return
        self.is_control = False
        self._auxiliary = None
        self.step_to_level(level)

    def on_opcode(self, opcode: Opcode) -> None:
        if self._auxiliary is not None:
            logger.warning(
                "Opcodes under <%s> are not interpreted; '%s' is added to the enclosing scope",
                self._auxiliary.value,
                opcode.key,
            )
            self._auxiliary = None

        if self.is_control:
            if opcode.name == "default_path":
                self.default_path = self.base_path / opcode.value
            self.control_codes.add_opcode(opcode)
        else:
            self._current().add_opcode(opcode)

    def finish(self) -> None:
        """Close the last open region and end the build."""
        self.step_to_level(0)
        self.current = None
        self.control_codes.freeze()
        logger.debug("Resolved %d regions", len(self.regions))
