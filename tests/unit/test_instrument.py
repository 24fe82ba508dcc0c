"""
Tests for Instrument assembly and the file loader.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

import sfzparse
from sfzparse import Instrument, LiteralError, LoopMode, Trigger, load_sfz, parse_sfz
from sfzparse.core.config import ParserConfig


class TestFromSfz:
    def test_global_group_regions(self):
        instrument = Instrument.from_sfz(
            "<global> a=1 volume=1 <group> pan=2 <region> key=3 <region> key=4", "/base"
        )
        assert len(instrument.regions) == 2
        assert [r.value("key") for r in instrument.regions] == [3, 4]
        assert all(r.value("volume") == 1.0 and r.value("pan") == 2.0 for r in instrument.regions)

    def test_default_path(self):
        instrument = Instrument.from_sfz(
            "<control> default_path=foo/ <global> <region> sample=bar.wav volume=0", "/base"
        )
        assert instrument.default_path == Path("/base") / "foo/"
        assert instrument.control_codes.value("default_path") == Path("foo")

    def test_default_path_defaults_to_base(self):
        assert Instrument.from_sfz("<region>", "/base").default_path == Path("/base")

    def test_default_path_absolute(self):
        instrument = Instrument.from_sfz("<control> default_path=/opt/samples", "/base")
        assert instrument.default_path == Path("/opt/samples")

    def test_fatal_literal_returns_nothing(self):
        with pytest.raises(LiteralError):
            Instrument.from_sfz("<region> key=60 <region> key=sixty")

    def test_idempotent(self):
        text = "<control> default_path=s/ <group> lovel=1 <region> key=c4 <region> key=d4"
        assert Instrument.from_sfz(text, "/x") == Instrument.from_sfz(text, "/x")

    def test_hashable(self):
        text = "<control> set_cc7=100 <group> lovel=1 <region> key=c4 <region> key=d4"
        first = Instrument.from_sfz(text, "/x")
        second = Instrument.from_sfz(text, "/x")
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_immutable(self):
        instrument = Instrument.from_sfz("<region>")
        assert isinstance(instrument.regions, tuple)
        with pytest.raises(ValidationError):
            instrument.default_path = Path("/elsewhere")  # type: ignore[misc]

    def test_module_level_helpers(self):
        assert parse_sfz("<region> key=1", "/b") == Instrument.from_sfz("<region> key=1", "/b")
        assert sfzparse.parse_sfz is parse_sfz


class TestFromFile:
    def test_piano_fixture(self, sfz_fixtures_dir: Path, config: ParserConfig):
        instrument = Instrument.from_file(sfz_fixtures_dir / "piano.sfz", config)

        assert instrument.default_path == sfz_fixtures_dir / "samples" / "piano"
        assert instrument.control_codes.value("note_offset") == 0
        assert len(instrument.regions) == 4

        soft_c, soft_e, loud_c, loud_e = instrument.regions
        assert soft_c.value("sample") == Path("Piano C4 soft.wav")
        assert (soft_c.value("lokey"), soft_c.value("hikey")) == (59, 61)
        assert (soft_e.value("lokey"), soft_e.value("hikey")) == (62, 65)
        assert soft_e.value("pitch_keycenter") == 63
        assert soft_c.value("pitch_keycenter") == 59
        assert (soft_c.value("lovel"), soft_c.value("hivel")) == (1, 64)
        assert soft_c.value("volume") == -6.0
        assert soft_c.value("ampeg_release") == 0.8

        assert (loud_c.value("lovel"), loud_c.value("hivel")) == (65, 127)
        assert loud_c.value("volume") == -3.0
        assert loud_e.value("tune") == -5
        assert loud_c.value("tune") is None

    def test_drums_fixture(self, sfz_fixtures_dir: Path, config: ParserConfig):
        instrument = load_sfz(sfz_fixtures_dir / "drums.sfz", config)
        kick, snare = instrument.regions
        assert kick.value("loop_mode") == LoopMode.ONE_SHOT
        assert snare.value("trigger") == Trigger.ATTACK
        assert instrument.default_path == sfz_fixtures_dir

    def test_missing_file_raises_os_error(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Instrument.from_file(tmp_path / "missing.sfz")

    def test_encoding_from_config(self, tmp_path: Path):
        path = tmp_path / "latin.sfz"
        path.write_bytes("<region> sample=caf\xe9.wav".encode("latin-1"))
        instrument = Instrument.from_file(path, ParserConfig(encoding="latin-1"))
        assert instrument.regions[0].value("sample") == Path("café.wav")

    def test_error_names_file(self, tmp_path: Path):
        path = tmp_path / "bad.sfz"
        path.write_text("<region>\nkey=sixty\n")
        with pytest.raises(LiteralError) as exc_info:
            Instrument.from_file(path)
        assert str(path) in str(exc_info.value)
        assert exc_info.value.context.line == 2
