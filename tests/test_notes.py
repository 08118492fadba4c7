"""
Tests for the note registry.

Tests cover:
- Note name -> pitch class lookup, including enharmonics
- Key signature classification and preferred spelling
- MIDI conversion
- PitchClass helpers
"""

import pytest

from chuk_mcp_harmony.constants import KeyType
from chuk_mcp_harmony.core import (
    NOTE_TO_SEMITONE,
    PitchClass,
    get_key_signature_type,
    get_preferred_note_name,
    is_note_name,
    midi_to_note,
    note_index,
    note_to_midi,
)
from chuk_mcp_harmony.errors import InvalidKeyError, MusicError, UnknownNoteError


class TestNoteIndex:
    """Tests for note_index."""

    def test_naturals(self) -> None:
        """Natural notes map to their pitch classes."""
        assert [note_index(n) for n in "CDEFGAB"] == [0, 2, 4, 5, 7, 9, 11]

    @pytest.mark.parametrize(
        ("sharp", "flat"),
        [("C#", "Db"), ("D#", "Eb"), ("F#", "Gb"), ("G#", "Ab"), ("A#", "Bb")],
    )
    def test_enharmonic_pairs(self, sharp: str, flat: str) -> None:
        """Sharp and flat spellings share a pitch class."""
        assert note_index(sharp) == note_index(flat)

    def test_theoretical_spellings(self) -> None:
        """B#, Cb, E#, Fb wrap correctly."""
        assert note_index("B#") == note_index("C") == 0
        assert note_index("Cb") == note_index("B") == 11
        assert note_index("E#") == note_index("F") == 5
        assert note_index("Fb") == note_index("E") == 4

    def test_double_accidentals(self) -> None:
        """Double sharps and flats are registered."""
        assert note_index("Bbb") == 9
        assert note_index("F##") == 7
        assert note_index("Cbb") == 10

    def test_registry_size(self) -> None:
        """Seven letters times five accidental forms."""
        assert len(NOTE_TO_SEMITONE) == 35

    def test_unknown_note(self) -> None:
        """Unknown names raise UnknownNoteError."""
        with pytest.raises(UnknownNoteError):
            note_index("H")

    def test_unknown_note_hierarchy(self) -> None:
        """UnknownNoteError is an InvalidKeyError and a ValueError."""
        with pytest.raises(InvalidKeyError):
            note_index("c")
        with pytest.raises(MusicError):
            note_index("C###")
        with pytest.raises(ValueError):
            note_index("")

    def test_is_note_name(self) -> None:
        """is_note_name mirrors the registry."""
        assert is_note_name("Eb")
        assert not is_note_name("Eb7")


class TestKeySignature:
    """Tests for key classification and spelling."""

    def test_sharp_keys(self) -> None:
        """Sharp keys are classified as SHARP."""
        for key in ("G", "D", "A", "E", "B", "F#", "C#"):
            assert get_key_signature_type(key) == KeyType.SHARP

    def test_flat_keys(self) -> None:
        """Flat keys are classified as FLAT."""
        for key in ("F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb"):
            assert get_key_signature_type(key) == KeyType.FLAT

    def test_neutral_key(self) -> None:
        """C and unknown keys are NEUTRAL."""
        assert get_key_signature_type("C") == KeyType.NEUTRAL
        assert get_key_signature_type("X") == KeyType.NEUTRAL

    def test_flat_key_forces_flats(self) -> None:
        """Flat keys spell with flats regardless of preference."""
        assert get_preferred_note_name(1, "F", False) == "Db"

    def test_sharp_key_forces_sharps(self) -> None:
        """Sharp keys spell with sharps regardless of preference."""
        assert get_preferred_note_name(1, "G", True) == "C#"

    def test_neutral_key_follows_preference(self) -> None:
        """C follows the caller's preference."""
        assert get_preferred_note_name(10, "C", True) == "Bb"
        assert get_preferred_note_name(10, "C", False) == "A#"

    def test_semitone_wraps(self) -> None:
        """Semitones outside 0-11 are reduced."""
        assert get_preferred_note_name(14, "C", False) == "D"


class TestMidi:
    """Tests for MIDI conversion."""

    def test_note_to_midi(self) -> None:
        """C4 is middle C."""
        assert note_to_midi("C", 4) == 60
        assert note_to_midi("A", 3) == 57
        assert note_to_midi("F#", 2) == 42

    def test_note_to_midi_flats(self) -> None:
        """Flat spellings convert like their sharps."""
        assert note_to_midi("Bb", 3) == note_to_midi("A#", 3) == 58

    def test_midi_to_note(self) -> None:
        """MIDI numbers convert to sharp names and octaves."""
        assert midi_to_note(60) == ("C", 4)
        assert midi_to_note(57) == ("A", 3)
        assert midi_to_note(42) == ("F#", 2)
        assert midi_to_note(21) == ("A", 0)


class TestPitchClass:
    """Tests for PitchClass."""

    def test_parse(self) -> None:
        """Parse accepts every registered spelling."""
        assert PitchClass.parse("Db") == PitchClass.Cs
        assert PitchClass.parse(" E# ") == PitchClass.F

    def test_transpose_wraps(self) -> None:
        """Transposing wraps around the octave."""
        assert PitchClass.B.transpose(1) == PitchClass.C
        assert PitchClass.C.transpose(-1) == PitchClass.B

    def test_distance_to(self) -> None:
        """Distance is ascending and modulo 12."""
        assert PitchClass.C.distance_to(PitchClass.G) == 7
        assert PitchClass.G.distance_to(PitchClass.C) == 5

    def test_spell(self) -> None:
        """Spelling follows the key."""
        assert PitchClass.As.spell("F") == "Bb"
        assert PitchClass.As.spell("B") == "A#"

    def test_midi_roundtrip(self) -> None:
        """from_midi and to_midi agree."""
        assert PitchClass.from_midi(PitchClass.E.to_midi(2)) == PitchClass.E
