"""
Chord pitch generation for notation rendering.

Produces spelled, octave-qualified pitches for a root + quality, with
optional inversion, plus a figured-bass display name. Octaves are
written octaves: F half-diminished from F3 is F3 Ab3 Cb4 Eb4, where Cb4
sounds as B3.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chuk_mcp_harmony.constants import Inversion
from chuk_mcp_harmony.errors import InvalidChordError, UnknownNoteError

from .intervals import parse_chord_with_interval_specs, spell_interval_with_degree
from .notes import note_index

# UI quality names -> interval table tokens
_QUALITY_ALIASES: dict[str, str] = {
    "major": "maj",
    "minor": "min",
    "diminished": "dim",
    "augmented": "aug",
    "major7": "maj7",
    "minor7": "min7",
    "dominant7": "7",
    "diminished7": "dim7",
    "half-diminished7": "m7b5",
    "augmented7": "aug7",
}

# Quality -> chord-symbol suffix for display names
_DISPLAY_SUFFIXES: dict[str, str] = {
    "major": "",
    "maj": "",
    "minor": "m",
    "min": "m",
    "diminished": "dim",
    "dim": "dim",
    "augmented": "aug",
    "aug": "aug",
    "major7": "maj7",
    "maj7": "maj7",
    "minor7": "m7",
    "min7": "m7",
    "dominant7": "7",
    "7": "7",
    "diminished7": "dim7",
    "dim7": "dim7",
    "half-diminished7": "ø7",
    "m7b5": "ø7",
    "augmented7": "aug7",
    "aug7": "aug7",
}

SEVENTH_QUALITIES: frozenset[str] = frozenset(
    {
        "major7",
        "maj7",
        "minor7",
        "min7",
        "dominant7",
        "7",
        "diminished7",
        "dim7",
        "half-diminished7",
        "m7b5",
        "augmented7",
        "aug7",
    }
)

_INVERSION_SHIFTS: dict[str, int] = {"root": 0, "first": 1, "second": 2, "third": 3}

# (superscript, subscript) figures
_TRIAD_FIGURES: dict[str, tuple[str, str]] = {"first": ("6", ""), "second": ("6", "4")}
_SEVENTH_FIGURES: dict[str, tuple[str, str]] = {
    "first": ("6", "5"),
    "second": ("4", "3"),
    "third": ("4", "2"),
}


@dataclass
class PitchResult:
    """A spelled note at a written octave."""

    note: str
    octave: int

    def __str__(self) -> str:
        return f"{self.note}{self.octave}"


@dataclass
class ChordPitches:
    """Pitches of a chord, bass first, with its display name."""

    pitches: list[PitchResult] = field(default_factory=list)
    display_name: str = ""


def normalize_quality(quality: str) -> str:
    """Map a UI quality name ('half-diminished7') to a table token ('m7b5')."""
    return _QUALITY_ALIASES.get(quality, quality)


def inversion_figures(inversion: Inversion | None, is_seventh: bool) -> tuple[str, str]:
    """Figured-bass (superscript, subscript) for an inversion."""
    if inversion is None or inversion == "root":
        return "", ""
    figures = _SEVENTH_FIGURES if is_seventh else _TRIAD_FIGURES
    return figures.get(inversion, ("", ""))


def format_display_name(root: str, quality: str, inversion: Inversion | None = None) -> str:
    """
    Build a display name with figured bass.

    The format is 'name|sup|sub' when figures are present, so the
    renderer can set them as super/subscripts: 'Cm|6|4', 'G7|6|5'.
    """
    suffix = _DISPLAY_SUFFIXES.get(quality, quality)
    sup, sub = inversion_figures(inversion, quality in SEVENTH_QUALITIES)
    if not sup and not sub:
        return f"{root}{suffix}"
    return f"{root}{suffix}|{sup}|{sub}"


def _written_octave_adjustment(note: str, sounding_pc: int) -> int:
    # Cb sounds in the octave below its letter, B# in the octave above
    if sounding_pc == 11 and note.startswith("C"):
        return 1
    if sounding_pc == 0 and note.startswith("B"):
        return -1
    return 0


def generate_chord_pitches(
    root: str,
    quality: str,
    root_octave: int,
    inversion: Inversion | None = None,
) -> ChordPitches:
    """
    Generate spelled pitches for a chord.

    Args:
        root: Root note name, e.g. 'F' or 'Db'
        quality: Quality token or UI name ('m7', 'minor7', 'half-diminished7')
        root_octave: Written octave of the root
        inversion: 'root', 'first', 'second' or 'third'

    Returns:
        ChordPitches with the bass first

    Raises:
        InvalidChordError: If the root is not a note name
    """
    try:
        root_pc = note_index(root)
    except UnknownNoteError:
        raise InvalidChordError(f"Invalid root note: {root}") from None

    specs = parse_chord_with_interval_specs(normalize_quality(quality))

    pitches: list[PitchResult] = []
    for semitones, degree in specs:
        absolute = root_pc + semitones
        note = spell_interval_with_degree(root, semitones, degree)
        octave = root_octave + absolute // 12 + _written_octave_adjustment(note, absolute % 12)
        pitches.append(PitchResult(note=note, octave=octave))

    shifts = _INVERSION_SHIFTS.get(inversion or "root", 0)
    if pitches and shifts:
        shifts %= len(pitches)
        # Drop the upper notes rather than raising the lower ones, keeping the register
        for pitch in pitches[shifts:]:
            if pitch.octave > 0:
                pitch.octave -= 1
        pitches = pitches[shifts:] + pitches[:shifts]

    return ChordPitches(
        pitches=pitches,
        display_name=format_display_name(root, quality, inversion),
    )
