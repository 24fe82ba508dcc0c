"""
sfzparse - SFZ instrument description parser.

Tokenizes SFZ text, resolves the global/master/group/region scope
hierarchy and exposes one fully inherited opcode map per region.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.config import ParserConfig, load_config
from .core.errors import BuilderError, LiteralError, ParseError, SfzError
from .core.instrument import Instrument, load_sfz, parse_sfz
from .core.ir import (
    CrossfadeCurve,
    FilterType,
    HeaderKind,
    LoopMode,
    OffMode,
    Opcode,
    OpcodeMap,
    SwitchVelocity,
    Trigger,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Instrument",
    "load_sfz",
    "parse_sfz",
    "ParserConfig",
    "load_config",
    "SfzError",
    "ParseError",
    "LiteralError",
    "BuilderError",
    "HeaderKind",
    "Opcode",
    "OpcodeMap",
    "CrossfadeCurve",
    "FilterType",
    "LoopMode",
    "OffMode",
    "SwitchVelocity",
    "Trigger",
]
