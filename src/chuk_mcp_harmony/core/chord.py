"""
Chord primitives - parsing, transposition and validation of chord names.

A chord name is root + suffix + optional slash bass ('F#m7', 'C/E').
The suffix is carried verbatim here; quality validation only happens
in the interval encoding path.
"""

from __future__ import annotations

from dataclasses import dataclass

from chuk_mcp_harmony.constants import ErrorMessages, KeyType
from chuk_mcp_harmony.errors import InvalidChordError, MusicError
from chuk_mcp_harmony.models.notation import ChordNotation, ChordValidationResult

from .notes import PitchClass, get_key_signature_type, get_preferred_note_name, note_index

# Diatonic chords in C major (I, ii, iii, IV, V, vi, vii)
# vii is written as a plain minor triad
DIATONIC_IN_C: tuple[str, ...] = ("C", "Dm", "Em", "F", "G", "Am", "Bm")

# Diatonic chords in C minor (i, ii°, III, iv, v, VI, VII)
DIATONIC_MINOR_IN_C: tuple[str, ...] = ("Cm", "Ddim", "Eb", "Fm", "Gm", "Ab", "Bb")

# Common borrowed / secondary chords offered before the diatonic set
COMMON_NON_DIATONIC: tuple[str, ...] = ("bVII", "bIII", "bVI", "ii7", "vi7", "iii7")

_CHORD_LETTERS = "ABCDEFG"


@dataclass(frozen=True)
class Chord:
    """
    A parsed chord name.

    Root and bass stay as spelled by the user; nothing is re-spelled
    during parsing.
    """

    root: str
    suffix: str = ""
    bass: str | None = None

    @property
    def is_empty(self) -> bool:
        """True for the chord parsed from an empty string."""
        return not self.root

    @property
    def is_minor(self) -> bool:
        """Minor quality: suffix starts with 'm' but not 'maj'."""
        return self.suffix.startswith("m") and not self.suffix.startswith("maj")

    def __str__(self) -> str:
        if self.bass is not None:
            return f"{self.root}{self.suffix}/{self.bass}"
        return f"{self.root}{self.suffix}"


def parse_chord(chord: str) -> Chord:
    """
    Parse a chord string into root, suffix and bass.

    Examples:
        'C' -> Chord('C', '', None)
        'Dm7' -> Chord('D', 'm7', None)
        'C/E' -> Chord('C', '', 'E')

    Raises:
        InvalidChordError: If the root is not an uppercase letter
    """
    if not chord:
        return Chord(root="", suffix="", bass=None)

    main, slash, bass_text = chord.partition("/")
    bass = bass_text.strip() if slash else None

    if not main:
        raise InvalidChordError(chord)

    first = main[0]
    if not (first.isascii() and first.isupper()):
        raise InvalidChordError(ErrorMessages.ROOT_NOT_UPPERCASE.format(chord=chord))

    root = first
    remainder = main[1:]
    if remainder[:1] in ("#", "b"):
        root += remainder[0]
        remainder = remainder[1:]

    return Chord(root=root, suffix=remainder, bass=bass)


def transpose_chord(chord: str, from_key: str, to_key: str, use_flats: bool) -> str:
    """
    Transpose a chord between keys with key-appropriate spelling.

    The suffix is carried unchanged; root and bass are re-spelled for
    the target key.

    Args:
        chord: Chord name, e.g. 'Dm7' or 'C/E'
        from_key: Key the chord is written in
        to_key: Key to move it to
        use_flats: Spelling preference when the target key is neutral

    Returns:
        The transposed chord name
    """
    if not chord:
        return chord

    interval = PitchClass.parse(from_key).distance_to(PitchClass.parse(to_key))
    parsed = parse_chord(chord)

    new_root = PitchClass.parse(parsed.root).transpose(interval).spell(to_key, use_flats)
    if parsed.bass is not None:
        new_bass = PitchClass.parse(parsed.bass).transpose(interval).spell(to_key, use_flats)
        return f"{new_root}{parsed.suffix}/{new_bass}"
    return f"{new_root}{parsed.suffix}"


def normalize_chord_to_key(chord: str, key: str) -> str:
    """
    Re-spell a chord's root to match a key signature.

    'D#m' in Eb -> 'Ebm'. Everything after the root is kept as written,
    since the bass may be interval notation like '/b2'.
    """
    parsed = parse_chord(chord)
    if parsed.is_empty:
        return chord

    use_flats = get_key_signature_type(key) == KeyType.FLAT
    normalized_root = get_preferred_note_name(note_index(parsed.root), key, use_flats)
    return f"{normalized_root}{chord[len(parsed.root):]}"


def get_diatonic_chords(key: str, use_flats: bool) -> list[str]:
    """Get the I, ii, iii, IV, V, vi, vii chords of a major key."""
    return [transpose_chord(chord, "C", key, use_flats) for chord in DIATONIC_IN_C]


def get_minor_diatonic_chords(key: str, use_flats: bool) -> list[str]:
    """Get the i, ii°, III, iv, v, VI, VII chords of a minor key."""
    return [transpose_chord(chord, "C", key, use_flats) for chord in DIATONIC_MINOR_IN_C]


def get_initial_chords(key: str, use_flats: bool) -> list[str]:
    """
    Get the starting palette for a key.

    A few common non-diatonic chords first, then the diatonic set.
    """
    from chuk_mcp_harmony.core.roman import roman_numeral_to_chord

    initial: list[str] = []
    for numeral in COMMON_NON_DIATONIC:
        try:
            initial.append(roman_numeral_to_chord(numeral, key, use_flats))
        except MusicError:
            continue
    initial.extend(get_diatonic_chords(key, use_flats))
    return initial


def validate_chord_input(text: str, key: str, use_flats: bool) -> ChordValidationResult:
    """
    Validate free-text input as a chord name or a Roman numeral.

    Input starting with A-G is treated as a chord name; anything else is
    resolved as a Roman numeral in the key.

    Args:
        text: Raw user input
        key: Key for numeral resolution
        use_flats: Spelling preference for neutral keys

    Returns:
        ChordValidationResult describing what was recognised
    """
    from chuk_mcp_harmony.core.roman import roman_numeral_to_chord

    trimmed = text.strip()
    if not trimmed:
        return ChordValidationResult.invalid()

    if trimmed[0] in _CHORD_LETTERS:
        try:
            parsed = parse_chord(trimmed)
        except MusicError:
            parsed = None
        if parsed is not None and not parsed.is_empty:
            return ChordValidationResult(
                valid=True,
                chord=trimmed,
                normalized_chord=trimmed,
                input_type="chord",
            )

    try:
        chord = roman_numeral_to_chord(trimmed, key, use_flats)
    except MusicError:
        return ChordValidationResult.invalid(ErrorMessages.INVALID_INPUT.format(text=trimmed))

    return ChordValidationResult(
        valid=True,
        chord=chord,
        normalized_chord=chord,
        input_type="numeral",
    )


def prepare_chord_display(chord: str, key: str) -> ChordNotation:
    """
    Pair a chord with its display numeral.

    The chord spelling is preserved as given - the caller has already
    chosen the enharmonic spelling.
    """
    from chuk_mcp_harmony.core.roman import get_display_numeral

    return ChordNotation(chord=chord, numeral=get_display_numeral(chord, key))
