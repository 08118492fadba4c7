"""
Interval specifications - chord qualities as (semitones, degree) stacks.

Each chord tone carries both its chromatic distance from the root and its
diatonic degree. The degree picks the letter, the distance picks the
accidental, so Fm7 spells F Ab C Eb (never G# or D#) and Cdim7 spells
C Eb Gb Bbb.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import MappingProxyType

from chuk_mcp_harmony.constants import ErrorMessages
from chuk_mcp_harmony.errors import ParseError

from .chord import parse_chord
from .notes import LETTERS, letter_of, note_index

logger = logging.getLogger(__name__)

# (semitones from root 0-23, diatonic degree 1-7)
IntervalSpec = tuple[int, int]

# Building blocks
_MAJOR: tuple[IntervalSpec, ...] = ((0, 1), (4, 3), (7, 5))
_MINOR: tuple[IntervalSpec, ...] = ((0, 1), (3, 3), (7, 5))
_DIM: tuple[IntervalSpec, ...] = ((0, 1), (3, 3), (6, 5))
_AUG: tuple[IntervalSpec, ...] = ((0, 1), (4, 3), (8, 5))
_SUS2: tuple[IntervalSpec, ...] = ((0, 1), (2, 2), (7, 5))
_SUS4: tuple[IntervalSpec, ...] = ((0, 1), (5, 4), (7, 5))

_b7: IntervalSpec = (10, 7)
_M7: IntervalSpec = (11, 7)
_bb7: IntervalSpec = (9, 7)
_M6: IntervalSpec = (9, 6)
_9: IntervalSpec = (14, 2)
_b9: IntervalSpec = (13, 2)
_s9: IntervalSpec = (15, 2)
_11: IntervalSpec = (17, 4)
_s11: IntervalSpec = (18, 4)
_13: IntervalSpec = (21, 6)
_b13: IntervalSpec = (20, 6)


def _build_specs() -> MappingProxyType[str, tuple[IntervalSpec, ...]]:
    specs: dict[str, tuple[IntervalSpec, ...]] = {}

    def add(names: Sequence[str], tones: tuple[IntervalSpec, ...]) -> None:
        for name in names:
            specs[name] = tones

    # Triads
    add(["", "M", "maj", "major"], _MAJOR)
    add(["m", "min", "minor", "-"], _MINOR)
    add(["dim", "°", "o"], _DIM)
    add(["aug", "+"], _AUG)
    add(["sus2"], _SUS2)
    add(["sus4", "sus"], _SUS4)

    # Sevenths
    add(["7"], (*_MAJOR, _b7))
    add(["maj7", "M7", "Maj7"], (*_MAJOR, _M7))
    add(["m7", "min7"], (*_MINOR, _b7))
    add(["mM7", "mmaj7", "mMaj7"], (*_MINOR, _M7))
    add(["dim7", "°7"], (*_DIM, _bb7))
    add(["m7b5", "ø", "ø7"], (*_DIM, _b7))
    add(["aug7", "+7"], (*_AUG, _b7))
    add(["7no5"], ((0, 1), (4, 3), _b7))

    # Altered fifths
    add(["7b5"], ((0, 1), (4, 3), (6, 5), _b7))
    add(["7#5"], (*_AUG, _b7))
    add(["maj7b5"], ((0, 1), (4, 3), (6, 5), _M7))
    add(["maj7#5"], (*_AUG, _M7))

    # Altered ninths, elevenths, thirteenths
    add(["7b9"], (*_MAJOR, _b7, _b9))
    add(["7#9"], (*_MAJOR, _b7, _s9))
    add(["m7b9"], (*_MINOR, _b7, _b9))
    add(["7alt"], ((0, 1), (4, 3), (6, 5), _b7, _b9))
    add(["maj7#11"], (*_MAJOR, _M7, _s11))
    add(["7b13"], (*_MAJOR, _b7, _b13))

    # Suspended sevenths
    add(["7sus", "7sus4", "m7sus4"], (*_SUS4, _b7))
    add(["7sus2"], (*_SUS2, _b7))
    add(["9sus", "9sus4"], (*_SUS4, _b7, _9))
    add(["7b9sus4"], (*_SUS4, _b7, _b9))

    # Sixths
    add(["6", "add6"], (*_MAJOR, _M6))
    add(["m6", "min6", "madd6"], (*_MINOR, _M6))
    add(["6/9", "69", "6add9"], (*_MAJOR, _M6, _9))
    add(["m6/9", "m69"], (*_MINOR, _M6, _9))
    add(["6sus2"], (*_SUS2, _M6))
    add(["6sus4"], (*_SUS4, _M6))

    # Added tones (the 2nd/4th sit below the 3rd/5th)
    add(["add2"], ((0, 1), (2, 2), (4, 3), (7, 5)))
    add(["add4"], ((0, 1), (4, 3), (5, 4), (7, 5)))
    add(["add9"], (*_MAJOR, _9))
    add(["add11"], (*_MAJOR, _11))
    add(["add13"], (*_MAJOR, _13))
    add(["madd2"], ((0, 1), (2, 2), (3, 3), (7, 5)))
    add(["madd4"], ((0, 1), (3, 3), (5, 4), (7, 5)))
    add(["madd9"], (*_MINOR, _9))
    add(["madd11"], (*_MINOR, _11))

    # Ninths
    add(["9"], (*_MAJOR, _b7, _9))
    add(["maj9", "M9", "Maj9"], (*_MAJOR, _M7, _9))
    add(["m9", "min9"], (*_MINOR, _b7, _9))
    add(["9b5"], ((0, 1), (4, 3), (6, 5), _b7, _9))
    add(["9#5"], (*_AUG, _b7, _9))
    add(["m9b5"], (*_DIM, _b7, _9))
    add(["9#11"], (*_MAJOR, _b7, _9, _s11))
    add(["maj9#11"], (*_MAJOR, _M7, _9, _s11))

    # Elevenths
    add(["11"], (*_MAJOR, _b7, _9, _11))
    add(["maj11"], (*_MAJOR, _M7, _9, _11))
    add(["m11", "min11"], (*_MINOR, _b7, _9, _11))
    add(["#11"], (*_MAJOR, _b7, _s11))

    # Thirteenths
    add(["13"], (*_MAJOR, _b7, _9, _13))
    add(["maj13"], (*_MAJOR, _M7, _9, _13))
    add(["m13", "min13"], (*_MINOR, _b7, _9, _13))

    # Power chord
    add(["5"], ((0, 1), (7, 5)))

    return MappingProxyType(specs)


# Chord quality token -> interval specifications (read-only)
CHORD_INTERVAL_SPECS: MappingProxyType[str, tuple[IntervalSpec, ...]] = _build_specs()

DEFAULT_CHORD_INTERVAL_SPECS: tuple[IntervalSpec, ...] = _MAJOR

# Spelled-out quality words accepted in place of table tokens
_QUALITY_WORDS: dict[str, str] = {
    "maj": "M",
    "major": "M",
    "minor": "m",
    "diminished": "dim",
    "augmented": "aug",
    "suspended": "sus4",
}


def parse_chord_with_interval_specs(suffix: str) -> list[IntervalSpec]:
    """
    Get the interval specifications for a chord suffix.

    Separators ('-', '_', ' ') are stripped and spelled-out quality words
    are mapped to table tokens. An unknown suffix falls back to the major
    triad rather than failing.

    Args:
        suffix: Quality token, e.g. 'm7', 'dim7', 'maj9#11'

    Returns:
        Ordered list of (semitones, degree) pairs
    """
    cleaned = suffix.replace("-", "").replace("_", "").replace(" ", "")
    normalized = _QUALITY_WORDS.get(cleaned.lower(), cleaned)

    specs = CHORD_INTERVAL_SPECS.get(normalized)
    if specs is None:
        specs = CHORD_INTERVAL_SPECS.get(cleaned)
    if specs is None:
        logger.debug(f"Unknown chord quality {suffix!r}, using major triad")
        specs = DEFAULT_CHORD_INTERVAL_SPECS
    return list(specs)


def parse_chord_with_intervals(suffix: str) -> list[int]:
    """Get just the semitone offsets for a chord suffix."""
    return [semitones for semitones, _degree in parse_chord_with_interval_specs(suffix)]


def interval_to_scale_degree(semitones: int) -> int:
    """
    Infer a diatonic degree (1-7) from a chromatic distance.

    Only used when no explicit degree is available; the tritone is
    treated as a raised 4th.
    """
    return {
        0: 1,
        1: 2,
        2: 2,
        3: 3,
        4: 3,
        5: 4,
        6: 4,
        7: 5,
        8: 5,
        9: 6,
        10: 7,
        11: 7,
    }[semitones % 12]


def get_letter_at_degree(root_letter: str, degree: int) -> str:
    """
    Get the letter a number of scale steps above a root letter.

    Examples:
        ('F', 3) -> 'A'
        ('F', 7) -> 'E'
    """
    if root_letter not in LETTERS:
        raise ParseError(f"Invalid root letter: {root_letter}")
    return LETTERS[(LETTERS.index(root_letter) + degree - 1) % 7]


_ACCIDENTALS: dict[int, str] = {0: "", 1: "#", -1: "b", 2: "##", -2: "bb"}


def spell_interval_with_degree(root: str, interval_semitones: int, scale_degree: int) -> str:
    """
    Spell the note an interval above a root, using an explicit degree.

    Examples:
        ('F', 3, 3) -> 'Ab'   minor 3rd
        ('F', 10, 7) -> 'Eb'  minor 7th
        ('C', 6, 5) -> 'Gb'   diminished 5th
        ('C', 9, 7) -> 'Bbb'  diminished 7th

    Raises:
        ParseError: If the spelling would need more than two accidentals
    """
    if not root:
        raise ParseError(ErrorMessages.EMPTY_ROOT)

    target_letter = get_letter_at_degree(letter_of(root), scale_degree)
    target_pitch = (note_index(root) + interval_semitones) % 12
    diff = (target_pitch - note_index(target_letter)) % 12
    offset = diff - 12 if diff > 6 else diff

    accidental = _ACCIDENTALS.get(offset)
    if accidental is None:
        raise ParseError(f"Invalid accidental adjustment: {offset}")
    return f"{target_letter}{accidental}"


def spell_interval_diatonically(root: str, interval_semitones: int) -> str:
    """Spell an interval with its degree inferred from the distance."""
    degree = interval_to_scale_degree(interval_semitones)
    return spell_interval_with_degree(root, interval_semitones, degree)


def interval_specs_to_notes(root: str, specs: Sequence[IntervalSpec]) -> list[str]:
    """Spell every interval specification from a root."""
    return [spell_interval_with_degree(root, semitones, degree) for semitones, degree in specs]


def chord_to_notes(chord: str) -> list[str]:
    """
    Spell the notes of a chord.

    A slash bass is prepended as written, even if it duplicates a
    chord tone.

    Examples:
        'Cmaj7' -> ['C', 'E', 'G', 'B']
        'Fm7' -> ['F', 'Ab', 'C', 'Eb']
        'C/E' -> ['E', 'C', 'E', 'G']

    Raises:
        ParseError: If the chord is empty
    """
    parsed = parse_chord(chord)
    if parsed.is_empty:
        raise ParseError("Empty chord")

    specs = parse_chord_with_interval_specs(parsed.suffix)
    notes = interval_specs_to_notes(parsed.root, specs)

    if parsed.bass is not None:
        notes.insert(0, parsed.bass)
    return notes


def get_chord_qualities() -> list[str]:
    """List every quality token the spelling table knows."""
    return sorted(CHORD_INTERVAL_SPECS)
