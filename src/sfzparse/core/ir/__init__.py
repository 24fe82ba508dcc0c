"""
sfzparse data model.

Header kinds, opcode value domains, opcode values and inheriting opcode
maps. All types are re-exported from this package.
"""

from .headers import AUXILIARY_HEADERS, HEADER_LEVELS, REGION_LEVEL, HeaderKind
from .opcode_map import OpcodeMap
from .opcodes import (
    INDEXED_OPCODES,
    OPCODES,
    Opcode,
    OpcodeDef,
    OpcodeValue,
    ValueKind,
    build_opcode,
    lookup_opcode,
)
from .types import CrossfadeCurve, FilterType, LoopMode, OffMode, SwitchVelocity, Trigger

__all__ = [
    "AUXILIARY_HEADERS",
    "HEADER_LEVELS",
    "REGION_LEVEL",
    "HeaderKind",
    "OpcodeMap",
    "INDEXED_OPCODES",
    "OPCODES",
    "Opcode",
    "OpcodeDef",
    "OpcodeValue",
    "ValueKind",
    "build_opcode",
    "lookup_opcode",
    "CrossfadeCurve",
    "FilterType",
    "LoopMode",
    "OffMode",
    "SwitchVelocity",
    "Trigger",
]
