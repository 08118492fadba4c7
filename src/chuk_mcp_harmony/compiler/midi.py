"""
MIDI export - audible previews of voiced progressions.

Converts voiced chords (lists of AudioNote) to MIDI files using mido.
All operations are deterministic: same input → same output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_harmony.constants import TICKS_PER_BEAT

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chuk_mcp_harmony.core.voicing import AudioNote

DEFAULT_VELOCITY = 80


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int
    duration_ticks: int
    velocity: int  # 0-127
    channel: int = 0

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a single-track MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    # note_off before note_on at the same tick, so repeated notes re-strike cleanly
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def beats_to_ticks(beats: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert a beat position to ticks."""
    return int(beats * ticks_per_beat)


def voicings_to_events(
    voicings: Sequence[Sequence[AudioNote]],
    beats_per_chord: float = 4.0,
    velocity: int = DEFAULT_VELOCITY,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> list[MidiEvent]:
    """
    Lay voiced chords end to end, each held for beats_per_chord.

    Duplicate pitches within a chord are written once.
    """
    chord_ticks = beats_to_ticks(beats_per_chord, ticks_per_beat)
    events: list[MidiEvent] = []

    for index, voicing in enumerate(voicings):
        start = index * chord_ticks
        seen: set[int] = set()
        for audio_note in voicing:
            pitch = audio_note.midi
            if pitch in seen:
                continue
            seen.add(pitch)
            events.append(
                MidiEvent(
                    pitch=pitch,
                    start_ticks=start,
                    duration_ticks=chord_ticks,
                    velocity=velocity,
                )
            )
    return events


def voicings_to_midi(
    voicings: Sequence[Sequence[AudioNote]],
    tempo_bpm: int = 90,
    beats_per_chord: float = 4.0,
    velocity: int = DEFAULT_VELOCITY,
) -> MidiFile:
    """
    Render a voiced progression as a block-chord MIDI file.

    Args:
        voicings: One AudioNote list per chord, in order
        tempo_bpm: Tempo in beats per minute
        beats_per_chord: How long each chord is held
        velocity: Note velocity (0-127)

    Returns:
        A mido MidiFile ready to be saved
    """
    events = voicings_to_events(voicings, beats_per_chord, velocity)
    return events_to_midi(events, tempo_bpm=tempo_bpm)
