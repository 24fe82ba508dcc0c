"""
Opcode values and the table of recognized opcode names.

Each opcode name maps to an ``OpcodeDef`` describing its value domain.
Parsing a raw value goes through the primitives in ``core.values``:
malformed literals raise ``LiteralError`` and out-of-domain values yield
``None`` (the opcode is dropped).

Opcodes ending in a MIDI CC number (``locc64``, ``set_cc7``...) are
defined once per family and carry the CC number in ``Opcode.cc``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from ..values import (
    IntWidth,
    parse_float,
    parse_float_between,
    parse_int,
    parse_int_between,
    parse_key,
    parse_signed_key,
)
from .types import CrossfadeCurve, FilterType, LoopMode, OffMode, SwitchVelocity, Trigger

OpcodeValue = Path | str | float | int | StrEnum


class ValueKind(StrEnum):
    """Value domains an opcode can be declared with."""

    PATH = "path"
    TEXT = "text"
    FLOAT = "float"
    INT = "int"
    KEY = "key"
    SIGNED_KEY = "signed_key"
    ENUM = "enum"

    @property
    def free_text(self) -> bool:
        """Values of this kind may contain spaces and run to the end of the line."""
        return self in (ValueKind.PATH, ValueKind.TEXT)


@dataclass(frozen=True)
class Opcode:
    """
    A parsed ``name=value`` declaration.

    Attributes:
        name: Opcode name (family name for CC-indexed opcodes)
        value: Validated value
        cc: MIDI CC number for CC-indexed opcodes
    """

    name: str
    value: OpcodeValue
    cc: int | None = None

    @property
    def key(self) -> str:
        """Identity used as the map key, e.g. ``lokey`` or ``locc64``."""
        if self.cc is None:
            return self.name
        return f"{self.name}{self.cc}"


@dataclass(frozen=True)
class OpcodeDef:
    """Value domain of one opcode name."""

    name: str
    kind: ValueKind
    low: float | None = None
    high: float | None = None
    width: IntWidth | None = None
    enum: type[StrEnum] | None = None
    indexed: bool = False

    def parse(self, raw: str, normalize_separators: bool = True) -> OpcodeValue | None:
        """
        Parse a raw value into this opcode's domain.

        Returns:
            The value, or None if it lies outside the domain

        Raises:
            LiteralError: If a numeric literal is malformed
        """
        if self.kind == ValueKind.PATH:
            if normalize_separators:
                raw = raw.replace("\\", "/")
            return Path(raw)
        if self.kind == ValueKind.TEXT:
            return raw
        if self.kind == ValueKind.FLOAT:
            if self.low is None and self.high is None:
                return parse_float(raw)
            low = float("-inf") if self.low is None else self.low
            high = float("inf") if self.high is None else self.high
            return parse_float_between(raw, low, high)
        if self.kind == ValueKind.INT:
            assert self.width is not None
            if self.low is None and self.high is None:
                return parse_int(raw, self.width)
            low = self.width.min if self.low is None else int(self.low)
            high = self.width.max if self.high is None else int(self.high)
            return parse_int_between(raw, self.width, low, high)
        if self.kind == ValueKind.KEY:
            return parse_key(raw)
        if self.kind == ValueKind.SIGNED_KEY:
            return parse_signed_key(raw)
        assert self.enum is not None
        try:
            return self.enum(raw.lower())
        except ValueError:
            return None


def _path(name: str) -> OpcodeDef:
    return OpcodeDef(name, ValueKind.PATH)


def _float(name: str, low: float | None, high: float | None) -> OpcodeDef:
    return OpcodeDef(name, ValueKind.FLOAT, low=low, high=high)


def _int(
    name: str, width: IntWidth, low: int | None = None, high: int | None = None, indexed: bool = False
) -> OpcodeDef:
    return OpcodeDef(name, ValueKind.INT, low=low, high=high, width=width, indexed=indexed)


def _key(name: str) -> OpcodeDef:
    return OpcodeDef(name, ValueKind.KEY)


def _signed_key(name: str) -> OpcodeDef:
    return OpcodeDef(name, ValueKind.SIGNED_KEY)


def _enum(name: str, enum: type[StrEnum]) -> OpcodeDef:
    return OpcodeDef(name, ValueKind.ENUM, enum=enum)


def _envelope(prefix: str, depth: int | None = None) -> list[OpcodeDef]:
    defs = [
        _float(f"{prefix}_{stage}", 0.0, 100.0)
        for stage in ("delay", "start", "attack", "hold", "decay", "sustain", "release")
    ]
    defs += [
        _float(f"{prefix}_vel2{stage}", -100.0, 100.0)
        for stage in ("delay", "attack", "hold", "decay", "sustain", "release")
    ]
    if depth is not None:
        defs.append(_int(f"{prefix}_depth", IntWidth.I16, -depth, depth))
    return defs


_DEFINITIONS: list[OpcodeDef] = [
    # Sample definition
    _path("sample"),
    _float("delay", 0.0, 100.0),
    _float("delay_random", 0.0, 100.0),
    _int("offset", IntWidth.U32),
    _int("offset_random", IntWidth.U32),
    _int("end", IntWidth.U32),
    _int("count", IntWidth.U32),
    _enum("loop_mode", LoopMode),
    _int("loop_start", IntWidth.U32),
    _int("loop_end", IntWidth.U32),
    _float("sync_beats", 0.0, 32.0),
    _float("sync_offset", 0.0, 32.0),
    # Input controls
    _int("lochan", IntWidth.U8, 1, 16),
    _int("hichan", IntWidth.U8, 1, 16),
    _signed_key("lokey"),
    _signed_key("hikey"),
    _signed_key("key"),
    _int("lovel", IntWidth.U8, 1, 127),
    _int("hivel", IntWidth.U8, 1, 127),
    _int("lobend", IntWidth.I16, -8192, 8192),
    _int("hibend", IntWidth.I16, -8192, 8192),
    _int("lochanaft", IntWidth.U8, 0, 127),
    _int("hichanaft", IntWidth.U8, 0, 127),
    _int("lopolyaft", IntWidth.U8, 0, 127),
    _int("hipolyaft", IntWidth.U8, 0, 127),
    _float("lorand", 0.0, 1.0),
    _float("hirand", 0.0, 1.0),
    _float("lobpm", 0.0, 500.0),
    _float("hibpm", 0.0, 500.0),
    _int("seq_length", IntWidth.U8, 1, 100),
    _int("seq_position", IntWidth.U8, 1, 100),
    _key("sw_lokey"),
    _key("sw_hikey"),
    _key("sw_last"),
    _key("sw_down"),
    _key("sw_up"),
    _key("sw_previous"),
    _enum("sw_vel", SwitchVelocity),
    _enum("trigger", Trigger),
    _int("group", IntWidth.U32),
    _int("off_by", IntWidth.U32),
    _enum("off_mode", OffMode),
    _int("locc", IntWidth.U8, 0, 127, indexed=True),
    _int("hicc", IntWidth.U8, 0, 127, indexed=True),
    _int("on_locc", IntWidth.I8, -1, 127, indexed=True),
    _int("on_hicc", IntWidth.I8, -1, 127, indexed=True),
    # Performance parameters
    _float("pan", -100.0, 100.0),
    _float("position", -100.0, 100.0),
    _float("width", -100.0, 100.0),
    _float("volume", -144.0, 6.0),
    _key("amp_keycenter"),
    _float("amp_keytrack", -96.0, 12.0),
    _float("amp_veltrack", -100.0, 100.0),
    _float("amp_random", 0.0, 24.0),
    _float("rt_decay", 0.0, 200.0),
    _int("output", IntWidth.U16, 0, 1024),
    _key("xfin_lokey"),
    _key("xfin_hikey"),
    _key("xfout_lokey"),
    _key("xfout_hikey"),
    _int("xfin_lovel", IntWidth.U8, 0, 127),
    _int("xfin_hivel", IntWidth.U8, 0, 127),
    _int("xfout_lovel", IntWidth.U8, 0, 127),
    _int("xfout_hivel", IntWidth.U8, 0, 127),
    _enum("xf_keycurve", CrossfadeCurve),
    _enum("xf_velcurve", CrossfadeCurve),
    _float("effect1", 0.0, 100.0),
    _float("effect2", 0.0, 100.0),
    # Pitch
    _int("transpose", IntWidth.I8, -127, 127),
    _int("tune", IntWidth.I16, -100, 100),
    _key("pitch_keycenter"),
    _int("pitch_keytrack", IntWidth.I16, -1200, 1200),
    _int("pitch_veltrack", IntWidth.I16, -9600, 9600),
    _float("pitch_random", 0.0, 9600.0),
    _int("bend_up", IntWidth.I16, -9600, 9600),
    _int("bend_down", IntWidth.I16, -9600, 9600),
    _int("bend_step", IntWidth.I16, 1, 1200),
    # Filter
    _enum("fil_type", FilterType),
    _float("cutoff", 0.0, None),
    _float("resonance", 0.0, 40.0),
    _int("fil_keytrack", IntWidth.I16, 0, 1200),
    _key("fil_keycenter"),
    _int("fil_veltrack", IntWidth.I16, -9600, 9600),
    _int("fil_random", IntWidth.U16, 0, 9600),
    # Envelope generators
    *_envelope("ampeg"),
    *_envelope("pitcheg", depth=12000),
    *_envelope("fileg", depth=12000),
    # LFOs
    _float("amplfo_delay", 0.0, 100.0),
    _float("amplfo_fade", 0.0, 100.0),
    _float("amplfo_depth", -10.0, 10.0),
    _float("amplfo_freq", 0.0, 20.0),
    _float("pitchlfo_delay", 0.0, 100.0),
    _float("pitchlfo_fade", 0.0, 100.0),
    _int("pitchlfo_depth", IntWidth.I16, -1200, 1200),
    _float("pitchlfo_freq", 0.0, 20.0),
    _float("fillfo_delay", 0.0, 100.0),
    _float("fillfo_fade", 0.0, 100.0),
    _int("fillfo_depth", IntWidth.I16, -1200, 1200),
    _float("fillfo_freq", 0.0, 20.0),
    # Control
    _path("default_path"),
    _int("note_offset", IntWidth.I8, -127, 127),
    _int("octave_offset", IntWidth.I8, -10, 10),
    _int("set_cc", IntWidth.U8, 0, 127, indexed=True),
    OpcodeDef("label_cc", ValueKind.TEXT, indexed=True),
]

OPCODES: dict[str, OpcodeDef] = {d.name: d for d in _DEFINITIONS if not d.indexed}
INDEXED_OPCODES: dict[str, OpcodeDef] = {d.name: d for d in _DEFINITIONS if d.indexed}

# Longest family first so "on_locc" wins over "locc"
_INDEXED_RE = re.compile(
    "({})([0-9]+)".format("|".join(sorted(INDEXED_OPCODES, key=len, reverse=True)))
)


def lookup_opcode(name: str) -> tuple[OpcodeDef, str | None] | None:
    """
    Find the definition for an opcode name.

    Returns:
        (definition, raw CC index or None), or None for unknown names
    """
    definition = OPCODES.get(name)
    if definition is not None:
        return definition, None
    match = _INDEXED_RE.fullmatch(name)
    if match is None:
        return None
    return INDEXED_OPCODES[match.group(1)], match.group(2)


def build_opcode(
    definition: OpcodeDef,
    raw_value: str,
    raw_index: str | None = None,
    normalize_separators: bool = True,
) -> Opcode | None:
    """
    Build an Opcode from its definition and raw text.

    Returns:
        The opcode, or None if the value or CC index is out of range

    Raises:
        LiteralError: If the value or CC index literal is malformed
    """
    cc = None
    if raw_index is not None:
        cc = parse_int_between(raw_index, IntWidth.U8, 0, 127)
        if cc is None:
            return None
    value = definition.parse(raw_value, normalize_separators)
    if value is None:
        return None
    return Opcode(definition.name, value, cc)
