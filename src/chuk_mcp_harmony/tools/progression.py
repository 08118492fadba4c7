"""
Progression tools - MCP tools for Roman numerals and interval encoding.

Tools for moving between chord names and numerals, and for encoding
progressions in a key-agnostic form.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import yaml

from chuk_mcp_harmony.core import (
    chord_to_notes,
    get_chord_numeral_for_lookup,
    get_display_numeral,
    history_to_interval_key,
    interval_to_chord,
    note_index,
    parse_chord,
    roman_numeral_to_chord,
)
from chuk_mcp_harmony.errors import ParseError
from chuk_mcp_harmony.models import ProgressionAnalysis, ProgressionStep

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def analyze_progression(chords: list[str], key: str, use_flats: bool = False) -> ProgressionAnalysis:
    """
    Analyse a progression in a key.

    The interval key is left empty when a chord uses a suffix the
    encoding does not accept; numerals and notes are still produced.
    """
    steps = [
        ProgressionStep(
            chord=chord,
            numeral=get_display_numeral(chord, key),
            lookup_numeral=get_chord_numeral_for_lookup(chord, key),
            notes=chord_to_notes(chord),
        )
        for chord in chords
    ]

    interval_key: str | None
    try:
        interval_key = history_to_interval_key(chords) if chords else None
    except ParseError as e:
        logger.debug(f"Progression has no interval key: {e}")
        interval_key = None

    return ProgressionAnalysis(key=key, use_flats=use_flats, steps=steps, interval_key=interval_key)


def register_progression_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register progression tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_roman_to_chord(numeral: str, key: str, use_flats: bool = False) -> str:
        """
        Resolve a Roman numeral to a chord in a key.

        Supports accidentals (bVII, #iv), quality marks (°, ø, +, maj7)
        and chord-tone basses (V/3, I/5).

        Args:
            numeral: Roman numeral (e.g., 'ii7', 'bVII', 'viiø7', 'V/3')
            key: Key root (e.g., 'C', 'Eb')
            use_flats: Prefer flats when the key is C

        Returns:
            JSON string with the chord name

        Example:
            music_roman_to_chord(numeral="bVII", key="C")
        """
        try:
            chord = roman_numeral_to_chord(numeral, key, use_flats)
            return json.dumps(
                {"status": "success", "numeral": numeral, "key": key, "chord": chord}
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to resolve roman numeral")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_roman_to_chord"] = music_roman_to_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_chord_to_roman(chord: str, key: str) -> str:
        """
        Get the Roman numerals of a chord in a key.

        Returns both the display numeral, which keeps the chord's spelling
        (F#m in C is '#iv', Gbm is 'bv'), and the lookup numeral, which
        folds enharmonics ('#iv' for both).

        Args:
            chord: Chord name
            key: Key root

        Returns:
            JSON string with numeral and lookup_numeral

        Example:
            music_chord_to_roman(chord="Gbm", key="C")
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "chord": chord,
                    "key": key,
                    "numeral": get_display_numeral(chord, key),
                    "lookup_numeral": get_chord_numeral_for_lookup(chord, key),
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to get chord numeral")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_chord_to_roman"] = music_chord_to_roman

    @mcp.tool  # type: ignore[arg-type]
    async def music_encode_progression(chords: list[str]) -> str:
        """
        Encode a progression as a key-agnostic interval key.

        Qualities alternate with the folded root movement between chords:
        ['C', 'Am', 'F'] -> 'M_3_m_4_M'.

        Args:
            chords: Chord names, oldest first

        Returns:
            JSON string with the interval key

        Example:
            music_encode_progression(chords=["C", "Am", "F", "G"])
        """
        try:
            interval_key = history_to_interval_key(chords)
            return json.dumps(
                {"status": "success", "chords": chords, "interval_key": interval_key}
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to encode progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_encode_progression"] = music_encode_progression

    @mcp.tool  # type: ignore[arg-type]
    async def music_decode_interval(
        interval: int,
        quality: str,
        from_chord: str,
        key: str,
        use_flats: bool = False,
    ) -> str:
        """
        Turn one interval-key step back into a chord.

        Args:
            interval: Semitones from the previous root
            quality: Quality token, optionally with a bass ('m', 'M/4')
            from_chord: Previous chord (its root is the reference)
            key: Key used for spelling
            use_flats: Prefer flats when the key is C

        Returns:
            JSON string with the decoded chord

        Example:
            music_decode_interval(interval=5, quality="m", from_chord="E", key="C")
        """
        try:
            from_root = note_index(parse_chord(from_chord).root)
            chord = interval_to_chord(interval, quality, from_root, use_flats, key)
            return json.dumps({"status": "success", "from_chord": from_chord, "chord": chord})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to decode interval")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_decode_interval"] = music_decode_interval

    @mcp.tool  # type: ignore[arg-type]
    async def music_analyze_progression(
        chords: list[str],
        key: str,
        use_flats: bool = False,
        format: str = "json",
    ) -> str:
        """
        Analyse a progression: numerals, notes and interval key per chord.

        Args:
            chords: Chord names in order
            key: Key root
            use_flats: Prefer flats when the key is C
            format: 'json' for structured output, 'yaml' for a YAML document

        Returns:
            JSON string with the analysis (or the YAML content)

        Example:
            music_analyze_progression(chords=["C", "Am", "F", "G7"], key="C")
        """
        try:
            if format not in ("json", "yaml"):
                return json.dumps(
                    {"status": "error", "message": f"Invalid format: {format}. Use 'json' or 'yaml'"}
                )

            analysis = analyze_progression(chords, key, use_flats)

            if format == "yaml":
                yaml_content = yaml.safe_dump(
                    analysis.to_yaml_dict(), default_flow_style=False, sort_keys=False
                )
                return json.dumps({"status": "success", "yaml": yaml_content})

            return json.dumps({"status": "success", "analysis": analysis.model_dump()})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to analyze progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_analyze_progression"] = music_analyze_progression

    return tools
