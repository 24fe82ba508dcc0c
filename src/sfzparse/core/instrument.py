"""
Instrument assembly.

An instrument is defined by one or more regions. Regions can be arranged
in groups (and groups under masters and a global scope) so common opcodes
are written once; the parsed ``Instrument`` holds every region with those
inherited opcodes already resolved.

All units in SFZ are real-world values: frequencies in Hertz, pitches in
cents, amplitudes in percent and volumes in decibels. Keys are MIDI note
numbers or note names (``c4`` is key 59, ``b4`` is key 70).
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .builder import ScopeBuilder
from .config import ParserConfig, load_config
from .ir import OpcodeMap
from .lexer import iter_tokens

logger = logging.getLogger(__name__)


class Instrument(BaseModel):
    """
    A parsed SFZ instrument.

    Attributes:
        regions: Resolved region maps, in the order they were closed
        default_path: Directory samples are looked up in
        control_codes: Opcodes declared under ``<control>``
    """

    regions: tuple[OpcodeMap, ...]
    default_path: Path
    control_codes: OpcodeMap

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def from_sfz(
        cls,
        sfz: str,
        base_path: Path | str = ".",
        source: str = "<string>",
        config: ParserConfig | None = None,
    ) -> Instrument:
        """
        Create an Instrument by parsing SFZ text.

        Args:
            sfz: SFZ source text
            base_path: Root location samples are searched from; the
                ``default_path`` control opcode is appended to it
            source: Source name used in error messages
            config: Parser options

        Raises:
            ParseError: On lexical errors or malformed numeric literals
        """
        builder = ScopeBuilder(base_path)
        for token in iter_tokens(sfz, source, config):
            builder.feed(token)
        builder.finish()

        return cls(
            regions=tuple(builder.regions),
            default_path=builder.default_path,
            control_codes=builder.control_codes,
        )

    @classmethod
    def from_file(cls, sfz_path: Path | str, config: ParserConfig | None = None) -> Instrument:
        """
        Create an Instrument by loading and parsing an .sfz file.

        Samples are searched relative to the file's directory.

        Raises:
            OSError: If the file cannot be read
            ParseError: On lexical errors or malformed numeric literals
        """
        config = config or load_config()
        sfz_path = Path(sfz_path)
        text = sfz_path.read_text(encoding=config.encoding)
        instrument = cls.from_sfz(text, sfz_path.parent, str(sfz_path), config)
        logger.info("Loaded %d regions from %s", len(instrument.regions), sfz_path)
        return instrument


def parse_sfz(
    sfz: str,
    base_path: Path | str = ".",
    source: str = "<string>",
    config: ParserConfig | None = None,
) -> Instrument:
    """Parse SFZ text into an Instrument."""
    return Instrument.from_sfz(sfz, base_path, source, config)


def load_sfz(sfz_path: Path | str, config: ParserConfig | None = None) -> Instrument:
    """Load and parse an .sfz file into an Instrument."""
    return Instrument.from_file(sfz_path, config)
