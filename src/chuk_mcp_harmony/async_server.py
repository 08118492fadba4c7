#!/usr/bin/env python3
"""
Async Harmony MCP Server using chuk-mcp-server

This server provides MCP tools for symbolic harmony: chord and Roman
numeral notation, degree-correct spelling, key-agnostic progression
encoding, and voice-led voicings ready for playback.

The server provides tools for:
- Parsing, transposing, spelling and validating chords
- Converting between chords and Roman numerals
- Encoding progressions as interval keys and analysing them
- Voicing chords (close, wide, or voice-led per session)
- Exporting voiced progressions as MIDI previews
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_harmony.sessions import SessionManager
from chuk_mcp_harmony.tools import (
    register_chord_tools,
    register_progression_tools,
    register_voicing_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-harmony")

# Paths - MIDI previews land in ./output unless CHUK_HARMONY_OUTPUT_DIR is set
BASE_PATH = Path.cwd()
OUTPUT_DIR = Path(os.environ.get("CHUK_HARMONY_OUTPUT_DIR", BASE_PATH / "output"))

# One voicing session per playback
session_manager = SessionManager()

# Register all tools
chord_tools = register_chord_tools(mcp)
progression_tools = register_progression_tools(mcp)
voicing_tools = register_voicing_tools(mcp, session_manager, OUTPUT_DIR)

# Export tool functions for direct access
music_parse_chord = chord_tools["music_parse_chord"]
music_transpose_chord = chord_tools["music_transpose_chord"]
music_chord_notes = chord_tools["music_chord_notes"]
music_chord_pitches = chord_tools["music_chord_pitches"]
music_chord_qualities = chord_tools["music_chord_qualities"]
music_diatonic_chords = chord_tools["music_diatonic_chords"]
music_validate_chord = chord_tools["music_validate_chord"]

music_roman_to_chord = progression_tools["music_roman_to_chord"]
music_chord_to_roman = progression_tools["music_chord_to_roman"]
music_encode_progression = progression_tools["music_encode_progression"]
music_decode_interval = progression_tools["music_decode_interval"]
music_analyze_progression = progression_tools["music_analyze_progression"]

music_voice_chord = voicing_tools["music_voice_chord"]
music_voice_progression = voicing_tools["music_voice_progression"]
music_reset_voicing = voicing_tools["music_reset_voicing"]
music_export_progression_midi = voicing_tools["music_export_progression_midi"]

logger.info("CHUK Harmony MCP Server initialized")
logger.info(f"  Output dir: {OUTPUT_DIR}")
