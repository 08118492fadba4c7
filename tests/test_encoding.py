"""
Tests for key-agnostic interval encoding.

Tests cover:
- Root movement folding
- Suffix normalization (alternative spellings, case, brackets)
- Chord -> (root, quality) and history -> interval key
- Decoding interval steps back into chords
"""

import pytest

from chuk_mcp_harmony.core import (
    VALID_SUFFIXES,
    build_slash_chord,
    calculate_bass_semitone,
    history_to_interval_key,
    interval_to_chord,
    is_valid_suffix,
    normalize_interval,
    normalize_suffix,
    parse_chord_for_interval,
    parse_interval_key,
    parse_quality_with_bass,
)
from chuk_mcp_harmony.errors import ParseError, UnknownQualityError


class TestNormalizeInterval:
    """Tests for normalize_interval."""

    @pytest.mark.parametrize(
        ("semitones", "expected"),
        [(0, 0), (1, 1), (6, 6), (7, 5), (11, 1), (12, 0), (-3, 3), (-7, 5)],
    )
    def test_folding(self, semitones: int, expected: int) -> None:
        """Movements fold to the smaller of up/down."""
        assert normalize_interval(semitones) == expected


class TestNormalizeSuffix:
    """Tests for normalize_suffix."""

    @pytest.mark.parametrize(
        ("suffix", "expected"),
        [
            ("sus", "sus4"),
            ("SUS", "sus4"),
            ("Sus", "sus4"),
            ("7M", "maj7"),
            ("7m", "maj7"),
            ("ma7", "maj7"),
            ("MA7", "maj7"),
            ("dimm", "dim"),
            ("DIMM", "dim"),
            ("aug5", "aug"),
            ("AUG5", "aug"),
            ("min", "m"),
            ("min7", "m7"),
            ("mi", "m"),
            ("MI", "m"),
            ("Mi", "m"),
            ("(maj7)", "maj7"),
            ("m(7)", "m7"),
            ("(sus4)", "sus4"),
            ("7sus", "7sus4"),
            ("7SUS", "7sus4"),
            ("9sus", "9sus4"),
            ("sus7", "7sus4"),
            ("sus9", "9sus4"),
            ("2", "sus2"),
            ("4", "sus4"),
            ("O", "dim"),
            ("o", "dim"),
            ("Om", "dim"),
            ("om", "dim"),
            ("O7", "dim7"),
            ("o7", "dim7"),
            ("m7-5", "m7b5"),
            ("M7-5", "m7b5"),
            ("7-5", "7b5"),
            ("7-9", "7b9"),
            ("mM7", "mmaj7"),
            ("mMaj7", "mmaj7"),
            ("MM7", "mmaj7"),
            ("MMAJ7", "mmaj7"),
            ("maug", "m#5"),
            ("maug5", "m#5"),
            ("MAUG", "m#5"),
            ("MAUG5", "m#5"),
            ("maug7", "m7#5"),
            ("MAUG7", "m7#5"),
            ("SUS2", "sus2"),
            ("SUS4", "sus4"),
            ("DIM7", "dim7"),
            ("AUG7", "aug7"),
            ("MAJ7", "maj7"),
            ("MAJ9", "maj9"),
            ("ADD9", "add9"),
            ("ADD11", "add11"),
        ],
    )
    def test_alternative_spellings(self, suffix: str, expected: str) -> None:
        """Alternative spellings reduce to canonical suffixes."""
        assert normalize_suffix(suffix) == expected

    def test_canonical_unchanged(self) -> None:
        """Canonical suffixes pass through."""
        for suffix in ("m7", "7", "maj7", "dim", "add9", "6/9", "7alt"):
            assert normalize_suffix(suffix) == suffix

    def test_valid_suffixes(self) -> None:
        """The canonical list includes the empty suffix."""
        assert "" in VALID_SUFFIXES
        assert is_valid_suffix("m7")
        assert not is_valid_suffix("xyz")


class TestParseChordForInterval:
    """Tests for parse_chord_for_interval."""

    @pytest.mark.parametrize(
        ("chord", "expected"),
        [
            ("C", (0, "M")),
            ("F#m7", (6, "m7")),
            ("Bb7", (10, "7")),
            ("Am/G", (9, "m/10")),
            ("A/G#", (9, "M/11")),
            ("C/E", (0, "M/4")),
            ("Dmin", (2, "m")),
        ],
    )
    def test_parsing(self, chord: str, expected: tuple[int, str]) -> None:
        """Chords split into pitch class and quality."""
        assert parse_chord_for_interval(chord) == expected

    def test_empty_chord(self) -> None:
        """Empty input is a parse error."""
        with pytest.raises(ParseError):
            parse_chord_for_interval("")

    def test_invalid_suffix(self) -> None:
        """Unsupported suffixes cannot be encoded."""
        with pytest.raises(ParseError, match="Invalid chord suffix"):
            parse_chord_for_interval("Cxyz")

    def test_invalid_bass(self) -> None:
        """Unknown basses cannot be encoded."""
        with pytest.raises(ParseError, match="Invalid bass note"):
            parse_chord_for_interval("C/H")


class TestHistoryToIntervalKey:
    """Tests for history_to_interval_key."""

    def test_single_chord(self) -> None:
        """One chord is just its quality."""
        assert history_to_interval_key(["C"]) == "M"

    def test_three_chords(self) -> None:
        """Qualities alternate with folded root movement."""
        assert history_to_interval_key(["C", "Am", "F"]) == "M_3_m_4_M"

    def test_fifth_folds_to_fourth(self) -> None:
        """A fifth up is encoded as a fourth."""
        assert history_to_interval_key(["C", "G"]) == "M_5_M"

    def test_key_agnostic(self) -> None:
        """The same progression encodes the same in every key."""
        assert history_to_interval_key(["C", "Am", "F", "G"]) == history_to_interval_key(
            ["Eb", "Cm", "Ab", "Bb"]
        )

    def test_slash_chords(self) -> None:
        """Slash basses are carried in the quality."""
        assert history_to_interval_key(["C", "G/B"]) == "M_5_M/4"

    def test_empty_history(self) -> None:
        """An empty history is a parse error."""
        with pytest.raises(ParseError):
            history_to_interval_key([])


class TestKeyParsing:
    """Tests for interval key helpers."""

    def test_parse_interval_key(self) -> None:
        """A single step splits into interval and quality."""
        assert parse_interval_key("3_m") == (3, "m")

    def test_parse_interval_key_invalid(self) -> None:
        """Malformed steps are parse errors."""
        with pytest.raises(ParseError):
            parse_interval_key("M_3_m")
        with pytest.raises(ParseError):
            parse_interval_key("x_m")

    def test_parse_quality_with_bass(self) -> None:
        """A bass interval is split off."""
        assert parse_quality_with_bass("M/4") == ("M", 4)
        assert parse_quality_with_bass("m7") == ("m7", None)

    def test_parse_quality_with_bad_bass(self) -> None:
        """Non-numeric bass intervals are parse errors."""
        with pytest.raises(ParseError):
            parse_quality_with_bass("M/E")

    def test_bass_helpers(self) -> None:
        """Bass helpers wrap and join."""
        assert calculate_bass_semitone(9, 10) == 7
        assert build_slash_chord("A", "m", "G") == "Am/G"


class TestIntervalToChord:
    """Tests for interval_to_chord."""

    def test_minor(self) -> None:
        """A fifth up from E is Am."""
        assert interval_to_chord(5, "m", 4, True, "C") == "Am"

    def test_major_marker(self) -> None:
        """M decodes to an empty suffix."""
        assert interval_to_chord(7, "M", 0, False, "C") == "G"

    def test_spelling_follows_key(self) -> None:
        """Roots are spelled for the key."""
        assert interval_to_chord(3, "7", 7, False, "F") == "Bb7"
        assert interval_to_chord(3, "7", 7, False, "G") == "A#7"

    def test_slash_relative_to_new_root(self) -> None:
        """The bass interval counts from the decoded root."""
        assert interval_to_chord(0, "M/4", 0, True, "C") == "C/E"
        assert interval_to_chord(0, "m/10", 7, True, "G") == "Gm/F"

    def test_unknown_quality(self) -> None:
        """Unknown qualities are rejected."""
        with pytest.raises(UnknownQualityError):
            interval_to_chord(0, "xyz", 0, False, "C")

    def test_bad_bass_interval(self) -> None:
        """Malformed bass intervals are rejected."""
        with pytest.raises(ParseError):
            interval_to_chord(0, "M/x", 0, False, "C")
