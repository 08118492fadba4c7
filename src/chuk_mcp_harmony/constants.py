"""
Constants and enums for the harmony engine.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class KeyType(str, Enum):
    """Key signature family, decides sharp vs flat spelling."""

    SHARP = "sharp"
    FLAT = "flat"
    NEUTRAL = "neutral"  # C (and anything unrecognised) follows the caller's preference


class Accidental(str, Enum):
    """Accidental attached to a Roman numeral degree."""

    FLAT = "b"
    SHARP = "#"
    DOUBLE_FLAT = "bb"
    DOUBLE_SHARP = "##"


class VoicingStyle(str, Enum):
    """How chord tones are assigned to octaves."""

    CLOSE = "close"  # Ascending, packed as tightly as possible
    WIDE = "wide"  # Two voices per octave
    LEAD = "lead"  # Stateful, minimal motion from the previous chord


# Sharp keys: G, D, A, E, B, F#, C# (+ the theoretical G#, D#, A#)
SHARP_KEYS: frozenset[str] = frozenset({"G", "D", "A", "E", "B", "F#", "C#", "G#", "D#", "A#"})

# Flat keys: F, Bb, Eb, Ab, Db, Gb, Cb
FLAT_KEYS: frozenset[str] = frozenset({"F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb"})

# Playable range for voiced output (A1 - C5)
MIN_MIDI = 21
MAX_MIDI = 72

# Bass voice register for voice leading
BASS_OCTAVE = 2

# Octaves searched when placing upper voices
INITIAL_VOICING_OCTAVES: tuple[int, ...] = (2, 3, 4, 5)
LEADING_VOICING_OCTAVES: tuple[int, ...] = (2, 3)

# Standard ticks per beat for MIDI previews
TICKS_PER_BEAT = 480

InputType = Literal["chord", "numeral"]

Inversion = Literal["root", "first", "second", "third"]


class ErrorMessages:
    """Standardized error messages."""

    EMPTY_CHORD = "Chord cannot be empty"
    EMPTY_KEY = "Key cannot be empty"
    EMPTY_NUMERAL = "Empty roman numeral"
    EMPTY_HISTORY = "Empty history"
    EMPTY_ROOT = "Empty chord root"
    INVALID_INPUT = "Invalid chord or numeral: {text}"
    INVALID_BASS = "Invalid bass note: {bass}"
    INVALID_BASS_INTERVAL = "Invalid bass interval: {bass}"
    INVALID_SUFFIX = "Invalid chord suffix: {suffix}"
    ROOT_NOT_UPPERCASE = "Root must be uppercase: {chord}"
    SESSION_NOT_FOUND = "Voicing session '{name}' not found."
