#!/usr/bin/env python3
"""
Example: Analyse and voice a progression, then export a MIDI preview.

This walks the whole pipeline: numerals -> chords -> spelled notes ->
voice-led voicings -> MIDI file you can open in any DAW.

Usage:
    python examples/voice_progression.py
    # Creates: examples/output/ii_v_i.mid
"""

from pathlib import Path

from chuk_mcp_harmony.compiler import voicings_to_midi
from chuk_mcp_harmony.core import (
    VoicingSession,
    chord_to_notes,
    history_to_interval_key,
    parse_chord,
    roman_numeral_to_chord,
)
from chuk_mcp_harmony.tools.progression import analyze_progression


def main() -> None:
    """Voice a ii-V-I in Bb and save it."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    key = "Bb"
    numerals = ["ii7", "V7", "I", "vi7"]
    chords = [roman_numeral_to_chord(numeral, key, use_flats=True) for numeral in numerals]

    print(f"Key of {key}: {' '.join(numerals)}")
    print(f"  Chords: {' '.join(chords)}")
    print(f"  Interval key: {history_to_interval_key(chords)}")

    analysis = analyze_progression(chords, key, use_flats=True)
    for step in analysis.steps:
        print(f"  {step.chord:8} {step.numeral:8} {' '.join(step.notes)}")

    # One session per playback so voice leading carries chord to chord
    session = VoicingSession()
    voicings = []
    for chord in chords:
        notes = chord_to_notes(chord)
        parsed = parse_chord(chord)
        bass = parsed.bass if parsed.bass is not None else notes[0]
        voicing = session.voice_chord_with_leading(notes, bass, base_octave=3)
        voicings.append(voicing)
        print(f"  {chord:8} -> {' '.join(str(n) for n in voicing)}")

    output_path = output_dir / "ii_v_i.mid"
    voicings_to_midi(voicings, tempo_bpm=80).save(str(output_path))
    print(f"\nCreated: {output_path}")


if __name__ == "__main__":
    main()
