"""
Parser configuration.

Settings are read from environment variables, following the same pattern
as the rest of the toolchain:

    SFZPARSE_ENCODING               text encoding used when loading files
    SFZPARSE_WARN_UNKNOWN_OPCODES   log unknown opcode names as warnings
    SFZPARSE_NORMALIZE_SEPARATORS   turn backslashes in paths into "/"

Usage:
    from sfzparse.core.config import load_config

    config = load_config()
    instrument = Instrument.from_file(path, config=config)
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

ENCODING_VAR = "SFZPARSE_ENCODING"
WARN_UNKNOWN_OPCODES_VAR = "SFZPARSE_WARN_UNKNOWN_OPCODES"
NORMALIZE_SEPARATORS_VAR = "SFZPARSE_NORMALIZE_SEPARATORS"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ParserConfig(BaseModel):
    """
    Options shared by the tokenizer and the file loader.

    Attributes:
        encoding: Encoding used to read .sfz files
        warn_unknown_opcodes: Log unknown opcodes at WARNING (else DEBUG)
        normalize_separators: Convert "\\" to "/" in path values
    """

    encoding: str = "utf-8"
    warn_unknown_opcodes: bool = True
    normalize_separators: bool = True

    model_config = ConfigDict(frozen=True)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").lower().strip()
    if raw == "":
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    logger.warning("Unknown %s value '%s'. Using default: %s", name, raw, default)
    return default


def load_config() -> ParserConfig:
    """Build a ParserConfig from the environment."""
    defaults = ParserConfig()
    encoding = os.environ.get(ENCODING_VAR, "").strip() or defaults.encoding
    return ParserConfig(
        encoding=encoding,
        warn_unknown_opcodes=_env_flag(WARN_UNKNOWN_OPCODES_VAR, defaults.warn_unknown_opcodes),
        normalize_separators=_env_flag(NORMALIZE_SEPARATORS_VAR, defaults.normalize_separators),
    )
