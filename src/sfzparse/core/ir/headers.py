"""
Header kinds.

Structural headers open a scope at a fixed nesting level; the others
introduce sections that are tokenized but not resolved hierarchically.
"""

from __future__ import annotations

from enum import StrEnum


class HeaderKind(StrEnum):
    """Header names recognized between angle brackets, e.g. ``<region>``."""

    CONTROL = "control"
    GLOBAL = "global"
    MASTER = "master"
    GROUP = "group"
    REGION = "region"
    CURVE = "curve"
    EFFECT = "effect"
    MIDI = "midi"
    SAMPLE = "sample"

    @property
    def level(self) -> int | None:
        """Scope level (0=global .. 3=region), or None for non-structural headers."""
        return HEADER_LEVELS.get(self)

    @property
    def is_structural(self) -> bool:
        return self in HEADER_LEVELS

    @property
    def is_auxiliary(self) -> bool:
        """Sections that are recognized but not interpreted."""
        return self in AUXILIARY_HEADERS


HEADER_LEVELS: dict[HeaderKind, int] = {
    HeaderKind.GLOBAL: 0,
    HeaderKind.MASTER: 1,
    HeaderKind.GROUP: 2,
    HeaderKind.REGION: 3,
}

REGION_LEVEL = HEADER_LEVELS[HeaderKind.REGION]

AUXILIARY_HEADERS = frozenset(
    {HeaderKind.CURVE, HeaderKind.EFFECT, HeaderKind.MIDI, HeaderKind.SAMPLE}
)
