"""
MIDI preview pipeline.

    chord names → spelled notes → voiced AudioNotes
    → MidiEvents (deterministic note events)
    → MIDI File
"""

from chuk_mcp_harmony.compiler.midi import (
    DEFAULT_VELOCITY,
    MidiEvent,
    beats_to_ticks,
    events_to_midi,
    voicings_to_events,
    voicings_to_midi,
)

__all__ = [
    "DEFAULT_VELOCITY",
    "MidiEvent",
    "beats_to_ticks",
    "events_to_midi",
    "voicings_to_events",
    "voicings_to_midi",
]
