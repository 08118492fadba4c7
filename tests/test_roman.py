"""
Tests for Roman numeral parsing, resolution and analysis.

Tests cover:
- Parsing numerals into degree, accidental, quality and bass
- Numeral -> chord in major and flat keys
- Spelling-preserving numerals (get_chord_numeral)
- Enharmonic-folded lookup numerals
"""

import pytest

from chuk_mcp_harmony.constants import Accidental
from chuk_mcp_harmony.core import (
    apply_accidental_to_note,
    get_chord_numeral,
    get_chord_numeral_for_lookup,
    get_display_numeral,
    get_scale_degree_note,
    parse_roman_numeral,
    roman_numeral_to_chord,
)
from chuk_mcp_harmony.errors import InvalidRomanNumeralError, ParseError


class TestParseRomanNumeral:
    """Tests for parse_roman_numeral."""

    def test_major(self) -> None:
        """Uppercase numerals are major."""
        parts = parse_roman_numeral("V")
        assert parts.degree == 5
        assert parts.accidental is None
        assert not parts.is_minor
        assert parts.suffix == ""

    def test_minor_with_suffix(self) -> None:
        """Lowercase numerals are minor and keep their suffix."""
        parts = parse_roman_numeral("ii7")
        assert parts.degree == 2
        assert parts.is_minor
        assert parts.suffix == "7"

    def test_longest_token_wins(self) -> None:
        """VII is not read as V."""
        assert parse_roman_numeral("VII").degree == 7
        assert parse_roman_numeral("iv").degree == 4

    def test_flat_prefix(self) -> None:
        """A leading b followed by a numeral is a flat."""
        parts = parse_roman_numeral("bVII7")
        assert parts.accidental == Accidental.FLAT
        assert parts.degree == 7
        assert parts.suffix == "7"

    def test_sharp_prefix(self) -> None:
        """A leading # is a sharp."""
        parts = parse_roman_numeral("#iv")
        assert parts.accidental == Accidental.SHARP
        assert parts.degree == 4

    def test_half_diminished(self) -> None:
        """ø and ø7 both become m7b5."""
        assert parse_roman_numeral("viiø7").suffix == "m7b5"
        assert parse_roman_numeral("viiø").suffix == "m7b5"

    def test_augmented(self) -> None:
        """+ and +7 become aug and aug7."""
        assert parse_roman_numeral("III+").suffix == "aug"
        assert parse_roman_numeral("V+7").suffix == "aug7"

    def test_quality_words(self) -> None:
        """maj and dim are compacted."""
        assert parse_roman_numeral("Imaj7").suffix == "M7"
        assert parse_roman_numeral("viidim").suffix == "°"

    def test_bass(self) -> None:
        """The bass is kept separately and on the suffix."""
        parts = parse_roman_numeral("V7/3")
        assert parts.bass == "3"
        assert parts.suffix == "7/3"

    def test_blank(self) -> None:
        """Blank numerals are rejected."""
        with pytest.raises(InvalidRomanNumeralError):
            parse_roman_numeral("  ")

    def test_not_a_numeral(self) -> None:
        """Input without a numeral token is rejected."""
        with pytest.raises(InvalidRomanNumeralError):
            parse_roman_numeral("xyz")


class TestScaleDegrees:
    """Tests for scale degree helpers."""

    def test_scale_degree_note(self) -> None:
        """Degrees follow the major scale of the key."""
        assert get_scale_degree_note(1, "C") == "C"
        assert get_scale_degree_note(4, "G") == "C"
        assert get_scale_degree_note(7, "G") == "F#"
        assert get_scale_degree_note(4, "F") == "Bb"

    def test_scale_degree_out_of_range(self) -> None:
        """Degrees outside 1-7 are rejected."""
        with pytest.raises(ParseError):
            get_scale_degree_note(8, "C")

    @pytest.mark.parametrize(
        ("note", "accidental", "expected"),
        [
            ("E", Accidental.FLAT, "Eb"),
            ("Bb", Accidental.SHARP, "B"),
            ("F#", Accidental.FLAT, "F"),
            ("Bb", Accidental.FLAT, "Bbb"),
            ("F#", Accidental.SHARP, "F##"),
            ("D", None, "D"),
        ],
    )
    def test_apply_accidental(self, note: str, accidental: Accidental | None, expected: str) -> None:
        """Accidentals stack onto the written note."""
        assert apply_accidental_to_note(note, accidental) == expected


class TestRomanNumeralToChord:
    """Tests for roman_numeral_to_chord."""

    @pytest.mark.parametrize(
        ("numeral", "key", "expected"),
        [
            ("I", "C", "C"),
            ("ii", "C", "Dm"),
            ("V7", "C", "G7"),
            ("ii7", "Bb", "Cm7"),
            ("bIII", "Eb", "Gb"),
            ("bVII", "C", "Bb"),
            ("#iv", "C", "F#m"),
            ("vii°", "C", "Bdim"),
            ("viiø7", "C", "Bm7b5"),
            ("III+", "C", "Eaug"),
            ("Imaj7", "C", "CM7"),
            ("vi", "G", "Em"),
        ],
    )
    def test_resolution(self, numeral: str, key: str, expected: str) -> None:
        """Numerals resolve to chords in the key."""
        assert roman_numeral_to_chord(numeral, key, False) == expected

    def test_chord_tone_bass(self) -> None:
        """Chord-tone basses become notes."""
        assert roman_numeral_to_chord("V/3", "C", False) == "G/B"
        assert roman_numeral_to_chord("I/5", "C", False) == "C/G"
        assert roman_numeral_to_chord("vi/b3", "C", False) == "Am/C"

    def test_minor_third_bass(self) -> None:
        """'3' on a minor numeral is the minor third."""
        assert roman_numeral_to_chord("ii/3", "C", False) == "Dm/F"

    def test_unknown_bass_kept(self) -> None:
        """Basses that are not chord tones are kept as written."""
        assert roman_numeral_to_chord("IV/x", "C", False) == "F/x"

    def test_invalid(self) -> None:
        """Unparseable numerals raise."""
        with pytest.raises(InvalidRomanNumeralError):
            roman_numeral_to_chord("", "C", False)


class TestGetChordNumeral:
    """Tests for the spelling-preserving numeral."""

    @pytest.mark.parametrize(
        ("chord", "expected"),
        [
            ("C", "I"),
            ("Dm", "ii"),
            ("G7", "V7"),
            ("Am7", "vi7"),
            ("Cmaj7", "Imaj7"),
            ("Bdim", "vii°"),
            ("Eaug", "III+"),
            ("Dsus4", "IIsus"),
            ("Bb", "bVII"),
            ("F#m", "#iv"),
            ("Gbm", "bv"),
        ],
    )
    def test_in_c(self, chord: str, expected: str) -> None:
        """Numerals in C."""
        assert get_chord_numeral(chord, "C") == expected

    @pytest.mark.parametrize(
        ("chord", "expected"),
        [
            ("Gb", "I"),
            ("Ab", "II"),
            ("Bbm", "iii"),
            ("Db", "V"),
            ("F", "VII"),
            ("G", "#I"),
        ],
    )
    def test_in_g_flat(self, chord: str, expected: str) -> None:
        """Letter distance decides the degree in flat keys."""
        assert get_chord_numeral(chord, "Gb") == expected

    def test_slash_bass_literal(self) -> None:
        """The bass is appended as written."""
        assert get_chord_numeral("C/E", "C") == "I/E"

    def test_empty_inputs(self) -> None:
        """Empty chord or key is a parse error."""
        with pytest.raises(ParseError):
            get_chord_numeral("", "C")
        with pytest.raises(ParseError):
            get_chord_numeral("C", "")

    def test_display_numeral(self) -> None:
        """Display numerals keep the literal bass note."""
        assert get_display_numeral("C/E", "C") == "I/E"
        assert get_display_numeral("G7", "C") == "V7"


class TestLookupNumeral:
    """Tests for the enharmonic-folded numeral."""

    @pytest.mark.parametrize(
        ("chord", "expected"),
        [
            ("C", "I"),
            ("Cmaj7", "IM7"),
            ("Fmaj7", "IVM7"),
            ("Dm7", "ii7"),
            ("Bb", "bVII"),
            ("Bdim7", "vii°7"),
            ("Bdim", "vii°"),
            ("Bm7b5", "viiø7"),
            ("Eaug", "III+"),
            ("F#m", "#iv"),
            ("Gbm", "#iv"),
        ],
    )
    def test_in_c(self, chord: str, expected: str) -> None:
        """Lookup numerals in C."""
        assert get_chord_numeral_for_lookup(chord, "C") == expected

    def test_enharmonics_fold(self) -> None:
        """Sharp and flat spellings share a lookup numeral."""
        assert get_chord_numeral_for_lookup("F#m", "C") == get_chord_numeral_for_lookup("Gbm", "C")

    @pytest.mark.parametrize(
        ("chord", "expected"),
        [("C/E", "I/3"), ("C/G", "I/5"), ("Am/C", "vi/3"), ("C/Bb", "I/b7")],
    )
    def test_slash_bass_as_chord_tone(self, chord: str, expected: str) -> None:
        """Slash basses become chord-tone functions."""
        assert get_chord_numeral_for_lookup(chord, "C") == expected

    def test_empty_chord(self) -> None:
        """An empty chord is a parse error."""
        with pytest.raises(ParseError):
            get_chord_numeral_for_lookup("", "C")
