"""
Core harmony engine - symbolic, synchronous, rule-driven.

- notes: Note registry, pitch classes and key signatures
- chord: Chord parsing, transposition and input validation
- intervals: Quality tables and degree-aware spelling
- encoding: Key-agnostic interval keys for progressions
- roman: Roman numeral parsing, resolution and analysis
- voicing: (note, octave) voicings, including stateful voice leading
- pitches: Octave-qualified chord pitches for notation
"""

from chuk_mcp_harmony.core.chord import (
    COMMON_NON_DIATONIC,
    DIATONIC_IN_C,
    DIATONIC_MINOR_IN_C,
    Chord,
    get_diatonic_chords,
    get_initial_chords,
    get_minor_diatonic_chords,
    normalize_chord_to_key,
    parse_chord,
    prepare_chord_display,
    transpose_chord,
    validate_chord_input,
)
from chuk_mcp_harmony.core.encoding import (
    SUFFIX_MAPPINGS,
    VALID_SUFFIXES,
    build_slash_chord,
    calculate_bass_semitone,
    history_to_interval_key,
    interval_to_chord,
    is_valid_suffix,
    normalize_interval,
    normalize_suffix,
    parse_chord_for_interval,
    parse_interval_key,
    parse_quality_with_bass,
)
from chuk_mcp_harmony.core.intervals import (
    CHORD_INTERVAL_SPECS,
    DEFAULT_CHORD_INTERVAL_SPECS,
    IntervalSpec,
    chord_to_notes,
    get_chord_qualities,
    get_letter_at_degree,
    interval_specs_to_notes,
    interval_to_scale_degree,
    parse_chord_with_interval_specs,
    parse_chord_with_intervals,
    spell_interval_diatonically,
    spell_interval_with_degree,
)
from chuk_mcp_harmony.core.notes import (
    FLAT_NAMES,
    NOTE_TO_SEMITONE,
    SHARP_NAMES,
    PitchClass,
    get_key_signature_type,
    get_preferred_note_name,
    is_note_name,
    midi_to_note,
    note_index,
    note_to_midi,
)
from chuk_mcp_harmony.core.pitches import (
    ChordPitches,
    PitchResult,
    format_display_name,
    generate_chord_pitches,
    normalize_quality,
)
from chuk_mcp_harmony.core.roman import (
    RomanNumeralParts,
    apply_accidental_to_note,
    get_chord_numeral,
    get_chord_numeral_for_lookup,
    get_display_numeral,
    get_scale_degree_note,
    parse_roman_numeral,
    roman_numeral_to_chord,
)
from chuk_mcp_harmony.core.voicing import (
    AudioNote,
    VoicingSession,
    voice_chord,
    voice_chord_with_leading,
    voice_notes,
)

__all__ = [
    # Notes
    "FLAT_NAMES",
    "NOTE_TO_SEMITONE",
    "SHARP_NAMES",
    "PitchClass",
    "get_key_signature_type",
    "get_preferred_note_name",
    "is_note_name",
    "midi_to_note",
    "note_index",
    "note_to_midi",
    # Chord
    "COMMON_NON_DIATONIC",
    "DIATONIC_IN_C",
    "DIATONIC_MINOR_IN_C",
    "Chord",
    "get_diatonic_chords",
    "get_initial_chords",
    "get_minor_diatonic_chords",
    "normalize_chord_to_key",
    "parse_chord",
    "prepare_chord_display",
    "transpose_chord",
    "validate_chord_input",
    # Intervals
    "CHORD_INTERVAL_SPECS",
    "DEFAULT_CHORD_INTERVAL_SPECS",
    "IntervalSpec",
    "chord_to_notes",
    "get_chord_qualities",
    "get_letter_at_degree",
    "interval_specs_to_notes",
    "interval_to_scale_degree",
    "parse_chord_with_interval_specs",
    "parse_chord_with_intervals",
    "spell_interval_diatonically",
    "spell_interval_with_degree",
    # Encoding
    "SUFFIX_MAPPINGS",
    "VALID_SUFFIXES",
    "build_slash_chord",
    "calculate_bass_semitone",
    "history_to_interval_key",
    "interval_to_chord",
    "is_valid_suffix",
    "normalize_interval",
    "normalize_suffix",
    "parse_chord_for_interval",
    "parse_interval_key",
    "parse_quality_with_bass",
    # Roman
    "RomanNumeralParts",
    "apply_accidental_to_note",
    "get_chord_numeral",
    "get_chord_numeral_for_lookup",
    "get_display_numeral",
    "get_scale_degree_note",
    "parse_roman_numeral",
    "roman_numeral_to_chord",
    # Voicing
    "AudioNote",
    "VoicingSession",
    "voice_chord",
    "voice_chord_with_leading",
    "voice_notes",
    # Pitches
    "ChordPitches",
    "PitchResult",
    "format_display_name",
    "generate_chord_pitches",
    "normalize_quality",
]
