"""
Note registry - note names, pitch classes and key signatures.

Note names are spellings ("C#", "Db", "Bbb"); pitch classes are the 12
chromatic values they sound as. Several spellings share a pitch class,
so conversion is only lossless in the name -> pitch direction.
Choosing a spelling for a pitch class is a key-signature concern.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType

from chuk_mcp_harmony.constants import FLAT_KEYS, SHARP_KEYS, KeyType
from chuk_mcp_harmony.errors import UnknownNoteError

# Display name tables (module level to avoid IntEnum member issues)
SHARP_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)
FLAT_NAMES: tuple[str, ...] = (
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
)

# Letters in scale order with their natural pitch classes
LETTERS: tuple[str, ...] = ("C", "D", "E", "F", "G", "A", "B")
_NATURALS: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_ACCIDENTAL_OFFSETS: dict[str, int] = {"": 0, "#": 1, "b": -1, "##": 2, "bb": -2}


def _build_note_table() -> MappingProxyType[str, int]:
    table: dict[str, int] = {}
    for letter, natural in _NATURALS.items():
        for accidental, offset in _ACCIDENTAL_OFFSETS.items():
            table[f"{letter}{accidental}"] = (natural + offset) % 12
    return MappingProxyType(table)


# Every accepted note name (naturals, single and double accidentals)
NOTE_TO_SEMITONE: MappingProxyType[str, int] = _build_note_table()


def note_index(note: str) -> int:
    """
    Get the pitch class (0-11) for a note name.

    Args:
        note: Note name such as 'C', 'F#', 'Eb', 'B#' or 'Abb'

    Returns:
        Semitone index from C

    Raises:
        UnknownNoteError: If the name is not in the registry
    """
    try:
        return NOTE_TO_SEMITONE[note]
    except KeyError:
        raise UnknownNoteError(note) from None


def is_note_name(note: str) -> bool:
    """Check whether a string is a registered note name."""
    return note in NOTE_TO_SEMITONE


def get_key_signature_type(key: str) -> KeyType:
    """Determine whether a key is spelled with sharps, flats, or either."""
    if key in SHARP_KEYS:
        return KeyType.SHARP
    if key in FLAT_KEYS:
        return KeyType.FLAT
    # C (and anything not in the lists) can go either way
    return KeyType.NEUTRAL


def get_preferred_note_name(semitone: int, key: str, use_flats: bool) -> str:
    """
    Spell a pitch class for a key.

    Sharp and flat keys force their own spelling; neutral keys follow
    the caller's preference.

    Args:
        semitone: Pitch class (any int, reduced mod 12)
        key: Key name used to pick sharps or flats
        use_flats: Preference for neutral keys

    Returns:
        Note name from the sharp or flat table
    """
    key_type = get_key_signature_type(key)
    if key_type == KeyType.FLAT:
        prefer_flats = True
    elif key_type == KeyType.SHARP:
        prefer_flats = False
    else:
        prefer_flats = use_flats

    names = FLAT_NAMES if prefer_flats else SHARP_NAMES
    return names[semitone % 12]


def letter_of(note: str) -> str:
    """Get the letter of a note name ('F#' -> 'F')."""
    if not note:
        raise UnknownNoteError(note)
    return note[0]


def note_to_midi(note: str, octave: int) -> int:
    """
    Convert a note name and octave to a MIDI note number. C4 = 60.

    The octave belongs to the letter, so 'Cb4' sounds as B4 (71), not B3.
    """
    return (octave + 1) * 12 + note_index(note)


def midi_to_note(midi: int) -> tuple[str, int]:
    """Convert a MIDI note number to a sharp-spelled name and octave."""
    return SHARP_NAMES[midi % 12], midi // 12 - 1


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def distance_to(self, other: PitchClass) -> int:
        """Ascending semitone distance to another pitch class (0-11)."""
        return (other.value - self.value) % 12

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, key: str = "C", use_flats: bool = False) -> str:
        """Get the preferred name for this pitch class in a key."""
        return get_preferred_note_name(self.value, key, use_flats)

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a note name like 'C', 'C#', 'Db', 'E#'."""
        return cls(note_index(name.strip()))
