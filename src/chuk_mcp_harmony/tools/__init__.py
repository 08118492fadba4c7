"""
MCP tool implementations.

Tools are organized by domain:
- chords - Parsing, transposition, spelling, validation
- progression - Roman numerals, interval keys, analysis
- voicing - Playable voicings, sessions, MIDI previews
"""

from chuk_mcp_harmony.tools.chords import register_chord_tools
from chuk_mcp_harmony.tools.progression import register_progression_tools
from chuk_mcp_harmony.tools.voicing import register_voicing_tools

__all__ = [
    "register_chord_tools",
    "register_progression_tools",
    "register_voicing_tools",
]
