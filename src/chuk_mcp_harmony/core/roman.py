"""
Roman numerals - key-independent chord references.

Two directions:
- numeral -> chord: 'bVII7' in C -> 'Bb7'
- chord -> numeral, in two flavours:
  * get_chord_numeral preserves spelling (F#m in C is '#iv', Gbm is 'bv')
  * get_chord_numeral_for_lookup folds enharmonics onto fixed tables so
    both of those become '#iv', which is what progression lookups need
"""

from __future__ import annotations

from dataclasses import dataclass

from chuk_mcp_harmony.constants import Accidental, ErrorMessages
from chuk_mcp_harmony.errors import InvalidRomanNumeralError, ParseError

from .chord import parse_chord, transpose_chord
from .notes import LETTERS, get_preferred_note_name, note_index

# Longest match first so 'VII' is not read as 'V'
ROMAN_TOKENS: tuple[str, ...] = (
    "VII",
    "VI",
    "IV",
    "III",
    "II",
    "V",
    "I",
    "vii",
    "vi",
    "iv",
    "iii",
    "ii",
    "v",
    "i",
)

_ROMAN_DEGREES: dict[str, int] = {"I": 1, "II": 2, "III": 3, "IV": 4, "V": 5, "VI": 6, "VII": 7}

# Major-scale semitone offsets for degrees 1-7
DEGREE_SEMITONES: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)

MAJOR_BASES: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII")
MINOR_BASES: tuple[str, ...] = ("i", "ii", "iii", "iv", "v", "vi", "vii")

# Enharmonic-folded numerals indexed by semitones above the key
LOOKUP_MAJOR: tuple[str, ...] = (
    "I",
    "bII",
    "II",
    "bIII",
    "III",
    "IV",
    "#IV",
    "V",
    "bVI",
    "VI",
    "bVII",
    "VII",
)
LOOKUP_MINOR: tuple[str, ...] = (
    "i",
    "bii",
    "ii",
    "biii",
    "iii",
    "iv",
    "#iv",
    "v",
    "bvi",
    "vi",
    "bvii",
    "vii",
)

_FLAT_PREFIX_TARGETS = frozenset("IViv")


@dataclass(frozen=True)
class RomanNumeralParts:
    """
    A parsed Roman numeral.

    suffix is normalized ('ø' -> 'm7b5', 'maj' -> 'M', 'dim' -> '°') and
    still carries any '/bass' part; bass holds that part on its own.
    """

    degree: int  # 1-7
    accidental: Accidental | None
    is_minor: bool
    suffix: str
    bass: str | None = None


def parse_roman_numeral(numeral: str) -> RomanNumeralParts:
    """
    Parse a Roman numeral such as 'I', 'bVII7', 'ii°' or 'V/3'.

    Raises:
        InvalidRomanNumeralError: If the input is blank or has no numeral
    """
    trimmed = numeral.strip()
    if not trimmed:
        raise InvalidRomanNumeralError(ErrorMessages.EMPTY_NUMERAL)

    main, slash, bass_text = trimmed.partition("/")
    bass = bass_text if slash else None

    # 'b' is only a flat when a numeral letter follows it
    accidental: Accidental | None = None
    body = main
    if main.startswith("b") and len(main) > 1 and main[1] in _FLAT_PREFIX_TARGETS:
        accidental = Accidental.FLAT
        body = main[1:]
    elif main.startswith("#"):
        accidental = Accidental.SHARP
        body = main[1:]

    token = next((t for t in ROMAN_TOKENS if body.startswith(t)), None)
    if token is None:
        raise InvalidRomanNumeralError(numeral)

    suffix = body[len(token) :]
    if suffix.startswith("ø7"):
        suffix = "m7b5" + suffix[2:]
    elif suffix.startswith("ø"):
        suffix = "m7b5" + suffix[1:]

    if suffix.startswith("+7"):
        suffix = "aug7" + suffix[2:]
    elif suffix.startswith("+"):
        suffix = "aug" + suffix[1:]

    suffix = suffix.replace("maj", "M").replace("dim", "°")
    if bass is not None:
        suffix = f"{suffix}/{bass}"

    return RomanNumeralParts(
        degree=_ROMAN_DEGREES[token.upper()],
        accidental=accidental,
        is_minor=token.islower(),
        suffix=suffix,
        bass=bass,
    )


def get_scale_degree_note(degree: int, key: str, use_flats: bool = False) -> str:
    """
    Get the major-scale note for a degree (1-7) in a key.

    Raises:
        ParseError: If the degree is out of range
    """
    if not 1 <= degree <= 7:
        raise ParseError(f"Invalid scale degree: {degree}")
    return transpose_chord(LETTERS[degree - 1], "C", key, use_flats)


def apply_accidental_to_note(note: str, accidental: Accidental | None) -> str:
    """
    Raise or lower a spelled note, stacking onto its own accidental.

    Examples:
        ('E', FLAT) -> 'Eb'
        ('Bb', SHARP) -> 'B'
        ('Bb', FLAT) -> 'Bbb'

    Raises:
        ParseError: If the note is empty
    """
    if accidental is None:
        return note
    if not note:
        raise ParseError("Empty note")

    letter, existing = note[0], note[1:]

    if accidental == Accidental.FLAT:
        if existing == "#":
            return letter
        if existing == "bb":
            return f"{letter}bbb"
        if existing == "b":
            return f"{letter}bb"
        return f"{letter}b"

    if accidental == Accidental.SHARP:
        if existing == "b":
            return letter
        if existing == "##":
            return f"{letter}###"
        if existing == "#":
            return f"{letter}##"
        return f"{letter}#"

    if accidental == Accidental.DOUBLE_FLAT:
        if existing == "#":
            return f"{letter}b"
        return f"{letter}bb"

    # Double sharp
    if existing == "b":
        return f"{letter}#"
    return f"{letter}##"


def _bass_tone_interval(tone: str, is_minor: bool) -> int | None:
    """Semitones above the root for a chord-tone bass like '3' or 'b7'."""
    return {
        "1": 0,
        "2": 2,
        "b3": 3,
        "3": 3 if is_minor else 4,
        "4": 5,
        "b5": 6,
        "5": 7,
        "#5": 8,
        "6": 9,
        "b7": 10,
        "7": 10 if is_minor else 11,
        "9": 2,
        "11": 5,
        "13": 9,
    }.get(tone)


def roman_numeral_to_chord(numeral: str, key: str, use_flats: bool) -> str:
    """
    Resolve a Roman numeral to a chord name in a key.

    Args:
        numeral: Numeral such as 'ii7', 'bVII', 'vii°' or 'V/3'
        key: Key the numeral is relative to
        use_flats: Spelling preference for neutral keys

    Returns:
        Chord name, e.g. 'Dm7' or 'G/B'

    Raises:
        InvalidRomanNumeralError: If the numeral cannot be parsed
    """
    parts = parse_roman_numeral(numeral)

    root = apply_accidental_to_note(
        get_scale_degree_note(parts.degree, key, use_flats), parts.accidental
    )

    main_suffix, slash, bass_tone = parts.suffix.partition("/")

    needs_minor_prefix = (
        parts.is_minor
        and "dim" not in main_suffix
        and "aug" not in main_suffix
        and "°" not in main_suffix
        and not main_suffix.startswith("m7b5")
    )
    chord_suffix = "m" if needs_minor_prefix else ""

    if main_suffix.startswith(("dim", "°")):
        chord_suffix = main_suffix.replace("°", "dim")
    elif main_suffix.startswith(("aug", "m7b5")):
        chord_suffix = main_suffix
    else:
        chord_suffix += main_suffix

    chord = f"{root}{chord_suffix}"
    if not slash:
        return chord

    interval = _bass_tone_interval(bass_tone, parts.is_minor)
    if interval is None:
        # Not a chord tone, keep whatever was written
        return f"{chord}/{bass_tone}"

    bass_note = get_preferred_note_name(note_index(root) + interval, key, use_flats)
    return f"{chord}/{bass_note}"


def get_chord_numeral(chord: str, key: str) -> str:
    """
    Get the spelling-preserving Roman numeral of a chord in a key.

    The degree comes from letter distance, so enharmonic spellings give
    different numerals: in C, 'F#m' -> '#iv' but 'Gbm' -> 'bv'.

    Raises:
        ParseError: If the chord or key is empty
    """
    if not chord:
        raise ParseError(ErrorMessages.EMPTY_CHORD)
    if not key:
        raise ParseError(ErrorMessages.EMPTY_KEY)

    main_chord, slash, bass = chord.partition("/")
    parsed = parse_chord(main_chord)
    if parsed.is_empty:
        raise ParseError("Invalid chord format")

    chord_letter = parsed.root[0].upper()
    key_letter = key[0].upper()
    if chord_letter not in LETTERS:
        raise ParseError(f"Invalid note letter: {chord_letter}")
    if key_letter not in LETTERS:
        raise ParseError(f"Invalid key letter: {key_letter}")

    relative_degree = (LETTERS.index(chord_letter) - LETTERS.index(key_letter)) % 7
    expected = (note_index(key) + DEGREE_SEMITONES[relative_degree]) % 12
    deviation = (note_index(parsed.root) - expected) % 12

    if deviation == 0:
        accidental = ""
    elif deviation == 11:
        accidental = "b"
    elif deviation == 1:
        accidental = "#"
    else:
        # Doubly altered: fall back to how the root itself is written
        accidental = parsed.root[1:2]

    is_minor = parsed.is_minor
    bases = MINOR_BASES if is_minor else MAJOR_BASES
    numeral = f"{accidental}{bases[relative_degree]}"

    suffix = parsed.suffix
    if is_minor and not suffix.startswith("m7b5"):
        suffix = suffix[1:]

    if "7" in suffix and "maj7" not in suffix:
        numeral += "7"
    elif "maj7" in suffix:
        numeral += "maj7"
    elif "dim" in suffix:
        numeral = numeral.lower() + "°"
    elif "aug" in suffix:
        numeral += "+"
    elif "sus" in suffix:
        numeral += "sus"
    else:
        numeral += suffix

    if slash:
        numeral += f"/{bass}"
    return numeral


def format_suffix_for_lookup(suffix: str, is_dim: bool, is_aug: bool, is_minor: bool) -> str:
    """Reduce a chord suffix to the compact form used in lookup numerals."""
    lower = suffix.lower()

    if is_dim:
        if "dim7" in lower:
            return "°7"
        if "dim" in lower or "°" in suffix:
            return "°"

    if is_aug:
        if "aug7" in lower:
            return "+7"
        if "aug" in lower or "+" in suffix:
            return "+"

    if suffix in ("m7b5", "ø7", "ø"):
        return "ø7"

    if lower in ("mm7", "mmaj7"):
        return "M7"

    formatted = suffix
    if is_minor and formatted.startswith("m") and not formatted.startswith("maj"):
        formatted = formatted[1:]

    for extension in ("7", "9", "11", "13"):
        formatted = formatted.replace(f"maj{extension}", f"M{extension}")

    if formatted == "maj":
        formatted = ""

    return formatted.replace("(", "").replace(")", "")


def get_bass_chord_tone_for_lookup(root: str, bass: str, is_minor: bool) -> str:
    """Name a slash bass by its chord-tone function above the root."""
    interval = (note_index(bass) - note_index(root)) % 12
    return (
        "1",
        "b2",
        "2",
        "3" if is_minor else "b3",
        "#3" if is_minor else "3",
        "4",
        "b5",
        "5",
        "#5",
        "6",
        "b7",
        "7",
    )[interval]


def get_chord_numeral_for_lookup(chord: str, key: str) -> str:
    """
    Get the enharmonic-folded numeral used for progression lookups.

    Examples (key of C):
        'Cmaj7' -> 'IM7'
        'Bb' -> 'bVII'
        'Dm7' -> 'ii7'
        'Gbm' -> '#iv'

    Raises:
        ParseError: If the chord is empty
        UnknownNoteError: If the root, bass or key is not a note name
    """
    if not chord:
        raise ParseError(ErrorMessages.EMPTY_CHORD)

    main_chord, slash, bass = chord.partition("/")
    parsed = parse_chord(main_chord)
    if parsed.is_empty:
        raise ParseError("Invalid chord format")

    interval = (note_index(parsed.root) - note_index(key)) % 12

    suffix = parsed.suffix
    is_minor = parsed.is_minor
    is_dim = "dim" in suffix.lower() or "°" in suffix
    is_aug = "aug" in suffix.lower() or "+" in suffix

    if is_dim:
        base = LOOKUP_MINOR[interval]
    elif is_aug:
        base = LOOKUP_MAJOR[interval]
    else:
        base = LOOKUP_MINOR[interval] if is_minor else LOOKUP_MAJOR[interval]

    numeral = base + format_suffix_for_lookup(suffix, is_dim, is_aug, is_minor)
    if slash:
        numeral += "/" + get_bass_chord_tone_for_lookup(parsed.root, bass, is_minor)
    return numeral


def get_display_numeral(chord: str, key: str) -> str:
    """
    Get the numeral to show next to a chord.

    Same as get_chord_numeral, but the bass is always the literal note
    from the chord string ('C/E' -> 'I/E').
    """
    numeral = get_chord_numeral(chord, key)
    if "/" not in numeral or "/" not in chord:
        return numeral

    numeral_base = numeral.partition("/")[0]
    bass_note = chord.partition("/")[2].strip()
    return f"{numeral_base}/{bass_note}"
