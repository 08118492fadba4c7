"""
Interval encoding - key-agnostic progression keys.

A progression is encoded as chord qualities joined by the folded root
movement between them: ['C', 'Am', 'F'] -> 'M_3_m_4_M'. The same key
describes the progression in every key, which makes it usable as a
lookup key for recommendations.

Slash chords carry their bass as the ascending semitone distance from
the root ('Am/G' -> 'm/10'), unfolded so C/E and C/Ab stay distinct.
"""

from __future__ import annotations

from collections.abc import Sequence

from chuk_mcp_harmony.constants import ErrorMessages
from chuk_mcp_harmony.errors import ParseError, UnknownNoteError, UnknownQualityError

from .chord import parse_chord
from .notes import get_preferred_note_name, note_index

# Alternative suffix spellings, matched case-insensitively
SUFFIX_MAPPINGS: dict[str, str] = {
    "dimm": "dim",
    "aug5": "aug",
    "7m": "maj7",
    "sus": "sus4",
    "7sus": "7sus4",
    "9sus": "9sus4",
    "2": "sus2",
    "4": "sus4",
    "m7-5": "m7b5",
    "m7b5": "m7b5",
    "o": "dim",
    "o7": "dim7",
    "om": "dim",
    "mi": "m",
    "sus7": "7sus4",
    "sus9": "9sus4",
    "ma7": "maj7",
    "mm7": "mmaj7",
    "mmaj7": "mmaj7",
    "maug7": "m7#5",
    "maug5": "m#5",
    "maug": "m#5",
    "min": "m",
    "min7": "m7",
}

# Canonical suffixes accepted in interval keys
VALID_SUFFIXES: frozenset[str] = frozenset(
    {
        "",
        "m",
        "dim",
        "dim7",
        "aug",
        "aug7",
        "7",
        "maj7",
        "m7",
        "mmaj7",
        "9",
        "maj9",
        "m9",
        "add9",
        "madd9",
        "11",
        "maj11",
        "m11",
        "add11",
        "madd11",
        "13",
        "maj13",
        "m13",
        "add13",
        "sus2",
        "sus4",
        "7sus2",
        "7sus4",
        "9sus4",
        "#5",
        "b5",
        "m#5",
        "m7#5",
        "7#5",
        "7b5",
        "7#9",
        "7b9",
        "7#11",
        "7b13",
        "7alt",
        "6",
        "m6",
        "6/9",
        "6sus2",
        "6sus4",
        "6add9",
        "5",
        "add2",
        "add4",
        "add6",
        "7no5",
    }
)

# Major-triad marker in interval keys
MAJOR_QUALITY = "M"

_CASE_PREFIXES: tuple[str, ...] = ("sus", "dim", "aug", "maj", "add")


def normalize_interval(semitones: int) -> int:
    """
    Fold a root movement to the smaller of up/down (0-6).

    Examples:
        7 -> 5 (a 5th up is a 4th down)
        -3 -> 3
    """
    modulo = semitones % 12
    return modulo if modulo <= 6 else 12 - modulo


def is_valid_suffix(suffix: str) -> bool:
    """Check a (normalized) suffix against the canonical list."""
    return suffix in VALID_SUFFIXES


def normalize_suffix(suffix: str) -> str:
    """
    Reduce a chord suffix to its canonical spelling.

    Examples:
        '(maj7)' -> 'maj7'
        '7-5' -> '7b5'
        'MI' -> 'm'
        'SUS2' -> 'sus2'
    """
    text = suffix.replace("(", "").replace(")", "")
    text = text.replace("-5", "b5").replace("-9", "b9")

    lower = text.lower()
    mapped = SUFFIX_MAPPINGS.get(lower)
    if mapped is not None:
        return mapped

    # Only the prefix case is normalized so 'maj7#11' keeps its tail
    for prefix in _CASE_PREFIXES:
        if lower.startswith(prefix):
            return prefix + text[len(prefix) :]
    return text


def parse_chord_for_interval(chord: str) -> tuple[int, str]:
    """
    Split a chord into root pitch class and interval-key quality.

    Examples:
        'C' -> (0, 'M')
        'F#m7' -> (6, 'm7')
        'Am/G' -> (9, 'm/10')

    Raises:
        ParseError: On an empty root, unknown bass or unsupported suffix
    """
    parsed = parse_chord(chord)
    if parsed.is_empty:
        raise ParseError("Empty chord root")

    root_semitone = note_index(parsed.root)

    bass_interval: int | None = None
    if parsed.bass is not None:
        try:
            bass_interval = (note_index(parsed.bass) - root_semitone) % 12
        except UnknownNoteError:
            raise ParseError(ErrorMessages.INVALID_BASS.format(bass=parsed.bass)) from None

    normalized = normalize_suffix(parsed.suffix)
    if normalized and not is_valid_suffix(normalized):
        raise ParseError(ErrorMessages.INVALID_SUFFIX.format(suffix=normalized))

    quality = normalized or MAJOR_QUALITY
    if bass_interval is not None:
        quality = f"{quality}/{bass_interval}"
    return root_semitone, quality


def history_to_interval_key(history: Sequence[str]) -> str:
    """
    Encode a chord history as an interval key.

    Args:
        history: Chord names, oldest first

    Returns:
        Key such as 'M_3_m_4_M'

    Raises:
        ParseError: If the history is empty or a chord cannot be encoded
    """
    if not history:
        raise ParseError(ErrorMessages.EMPTY_HISTORY)

    parts: list[str] = []
    previous_root: int | None = None
    for chord in history:
        root, quality = parse_chord_for_interval(chord)
        if previous_root is not None:
            parts.append(str(normalize_interval(root - previous_root)))
        parts.append(quality)
        previous_root = root
    return "_".join(parts)


def parse_interval_key(key: str) -> tuple[int, str]:
    """
    Parse a single-step key like '3_m' into (interval, quality).

    Raises:
        ParseError: If the key is not exactly '<int>_<quality>'
    """
    parts = key.split("_")
    if len(parts) != 2:
        raise ParseError(f"Invalid interval key format: {key}")
    try:
        interval = int(parts[0])
    except ValueError:
        raise ParseError(f"Invalid interval: {parts[0]}") from None
    return interval, parts[1]


def parse_quality_with_bass(quality: str) -> tuple[str, int | None]:
    """
    Split 'M/4' into ('M', 4); a plain quality has no bass.

    Raises:
        ParseError: If the bass part is not an integer
    """
    main, slash, bass_text = quality.partition("/")
    if not slash:
        return quality, None
    try:
        return main, int(bass_text)
    except ValueError:
        raise ParseError(ErrorMessages.INVALID_BASS_INTERVAL.format(bass=bass_text)) from None


def calculate_bass_semitone(root_semitone: int, bass_interval: int) -> int:
    """Pitch class of a bass a number of semitones above the root."""
    return (root_semitone + bass_interval) % 12


def build_slash_chord(root: str, suffix: str, bass_note: str) -> str:
    """Join root, suffix and bass into 'Root[suffix]/Bass'."""
    return f"{root}{suffix}/{bass_note}"


def interval_to_chord(
    interval: int,
    quality: str,
    from_root: int,
    use_flats: bool,
    key: str,
) -> str:
    """
    Decode one interval-key step back into a chord name.

    Args:
        interval: Semitones from the previous root
        quality: Quality token, optionally with '/bass' interval
        from_root: Previous root pitch class
        use_flats: Spelling preference for neutral keys
        key: Key used for spelling

    Returns:
        Chord name, e.g. 'Am' or 'C/E'

    Raises:
        ParseError: If the bass interval is malformed
        UnknownQualityError: If the quality is not a canonical suffix
    """
    new_root = (from_root + interval) % 12
    root_note = get_preferred_note_name(new_root, key, use_flats)

    main_quality, bass_interval = parse_quality_with_bass(quality)
    if main_quality == MAJOR_QUALITY:
        suffix = ""
    elif is_valid_suffix(main_quality):
        suffix = main_quality
    else:
        raise UnknownQualityError(main_quality)

    if bass_interval is None:
        return f"{root_note}{suffix}"

    # Bass is relative to the new root, not the previous one
    bass_note = get_preferred_note_name(calculate_bass_semitone(new_root, bass_interval), key, use_flats)
    return build_slash_chord(root_note, suffix, bass_note)
