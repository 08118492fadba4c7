"""
Voice leading - turning note names into playable (note, octave) pairs.

Three strategies:
- CLOSE: stack the notes upward as tightly as possible
- WIDE: two voices per octave
- LEAD: stateful, keep each upper voice near where the previous chord
  left it; the continuity state lives in a VoicingSession owned by the
  caller

Every produced pitch is clamped into MIDI [21, 72] (A1 - C5).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_harmony.constants import (
    BASS_OCTAVE,
    INITIAL_VOICING_OCTAVES,
    LEADING_VOICING_OCTAVES,
    MAX_MIDI,
    MIN_MIDI,
    VoicingStyle,
)
from chuk_mcp_harmony.errors import VoiceLeadingError

from .notes import midi_to_note, note_to_midi

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioNote:
    """A note name fixed to an octave - what the playback side consumes."""

    note: str
    octave: int

    @property
    def midi(self) -> int:
        """MIDI note number. C4 = 60."""
        return note_to_midi(self.note, self.octave)

    def __str__(self) -> str:
        return f"{self.note}{self.octave}"


def clamp_audio_note(audio_note: AudioNote) -> AudioNote:
    """
    Pull a note into the playable range.

    Notes already in range keep their spelling; a clamped note is
    re-spelled with sharps.
    """
    midi = audio_note.midi
    clamped = max(MIN_MIDI, min(MAX_MIDI, midi))
    if clamped == midi:
        return audio_note
    name, octave = midi_to_note(clamped)
    return AudioNote(name, octave)


def _close_voicing_octave(note: str, base_octave: int, previous: AudioNote | None) -> int:
    if previous is None:
        return base_octave

    previous_midi = previous.midi
    for octave in (base_octave, previous.octave):
        if note_to_midi(note, octave) > previous_midi:
            return octave
    return previous.octave + 1


def _apply_close_voicing(notes: Sequence[str], base_octave: int) -> list[AudioNote]:
    voiced: list[AudioNote] = []
    for note in notes:
        previous = voiced[-1] if voiced else None
        voiced.append(AudioNote(note, _close_voicing_octave(note, base_octave, previous)))
    return voiced


def _apply_wide_voicing(notes: Sequence[str], base_octave: int) -> list[AudioNote]:
    return [AudioNote(note, base_octave + index // 2) for index, note in enumerate(notes)]


def voice_chord(
    notes: Sequence[str],
    bass: str,
    base_octave: int,
    style: VoicingStyle = VoicingStyle.CLOSE,
) -> list[AudioNote]:
    """
    Assign octaves to chord tones without reference to earlier chords.

    Args:
        notes: Spelled chord tones, lowest first
        bass: Bass note (unused by CLOSE and WIDE, kept for a uniform call shape)
        base_octave: Octave of the first note
        style: CLOSE or WIDE

    Returns:
        One AudioNote per input note, clamped into range

    Raises:
        UnknownNoteError: If a note name is not recognised
        VoiceLeadingError: If asked for the stateful LEAD style
    """
    if style == VoicingStyle.CLOSE:
        voiced = _apply_close_voicing(notes, base_octave)
    elif style == VoicingStyle.WIDE:
        voiced = _apply_wide_voicing(notes, base_octave)
    else:
        raise VoiceLeadingError(f"{style.value} voicing needs a VoicingSession")
    return [clamp_audio_note(audio_note) for audio_note in voiced]


def _remove_one(notes: Sequence[str], bass: str) -> list[str]:
    upper = list(notes)
    if bass in upper:
        upper.remove(bass)
    return upper


def _lowest_octave_above(note: str, bass_midi: int) -> int:
    for octave in INITIAL_VOICING_OCTAVES:
        if note_to_midi(note, octave) > bass_midi:
            return octave
    return INITIAL_VOICING_OCTAVES[-1]


def _closest_octave(
    note: str,
    bass_midi: int,
    default_octave: int,
    previous_upper: Sequence[AudioNote],
) -> int:
    best_octave = default_octave
    best_distance: int | None = None

    for octave in LEADING_VOICING_OCTAVES:
        midi = note_to_midi(note, octave)
        if midi < MIN_MIDI or midi > MAX_MIDI or midi <= bass_midi:
            continue
        for previous in previous_upper:
            distance = abs(midi - previous.midi)
            # Strict comparison: ties keep the first candidate found
            if best_distance is None or distance < best_distance:
                best_distance = distance
                best_octave = octave
    return best_octave


class VoicingSession:
    """
    Continuity state for one playback session.

    Holds the last voicing produced by voice_chord_with_leading so the
    next chord can move as little as possible. Not thread-safe; give
    every concurrent session its own instance.
    """

    def __init__(self) -> None:
        self.previous: list[AudioNote] | None = None

    @property
    def previous_upper(self) -> list[AudioNote]:
        """Upper voices of the last voicing (empty when there are none)."""
        if not self.previous:
            return []
        return self.previous[1:]

    def reset(self) -> None:
        """Forget the previous voicing; the next chord is voiced fresh."""
        logger.debug("Voicing session reset")
        self.previous = None

    def voice_chord_with_leading(
        self,
        notes: Sequence[str],
        bass: str,
        base_octave: int,
    ) -> list[AudioNote]:
        """
        Voice a chord with minimal motion from the previous one.

        The bass sits at octave 2. One occurrence of the bass note is
        removed from the upper voices. With no previous upper voices each
        upper note takes the lowest octave above the bass; otherwise each
        searches octaves 2-3 for the pitch nearest any previous upper
        voice, falling back to base_octave.

        Args:
            notes: Spelled chord tones
            bass: Bass note name
            base_octave: Fallback octave when no candidate fits

        Returns:
            [bass] followed by the upper voices, ascending by pitch

        Raises:
            UnknownNoteError: If a note name is not recognised
        """
        bass_note = AudioNote(bass, BASS_OCTAVE)
        bass_midi = bass_note.midi
        upper_notes = _remove_one(notes, bass)
        previous_upper = self.previous_upper

        if previous_upper:
            upper = [
                AudioNote(note, _closest_octave(note, bass_midi, base_octave, previous_upper))
                for note in upper_notes
            ]
        else:
            upper = [AudioNote(note, _lowest_octave_above(note, bass_midi)) for note in upper_notes]

        upper = sorted((clamp_audio_note(audio_note) for audio_note in upper), key=lambda n: n.midi)
        result = [bass_note, *upper]

        self.previous = result
        return list(result)


def voice_chord_with_leading(
    notes: Sequence[str],
    bass: str,
    base_octave: int,
    session: VoicingSession,
) -> list[AudioNote]:
    """Voice a chord against a session's previous voicing."""
    return session.voice_chord_with_leading(notes, bass, base_octave)


def voice_notes(
    notes: Sequence[str],
    bass: str,
    base_octave: int,
    style: VoicingStyle,
    session: VoicingSession | None = None,
) -> list[AudioNote]:
    """
    Voice a chord with any style.

    LEAD needs a session; CLOSE and WIDE ignore it.

    Raises:
        VoiceLeadingError: If there are no notes, or LEAD has no session
    """
    if not notes:
        raise VoiceLeadingError("no notes to voice")

    if style == VoicingStyle.LEAD:
        if session is None:
            raise VoiceLeadingError("lead voicing needs a VoicingSession")
        return session.voice_chord_with_leading(notes, bass, base_octave)
    return voice_chord(notes, bass, base_octave, style)
