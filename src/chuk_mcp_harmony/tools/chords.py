"""
Chord tools - MCP tools for chord names.

Tools for parsing, transposing, spelling and validating chords.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from chuk_mcp_harmony.core import (
    chord_to_notes,
    generate_chord_pitches,
    get_chord_qualities,
    get_diatonic_chords,
    get_initial_chords,
    get_minor_diatonic_chords,
    parse_chord,
    transpose_chord,
    validate_chord_input,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_chord_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register chord tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_parse_chord(chord: str) -> str:
        """
        Split a chord name into root, suffix and bass.

        Args:
            chord: Chord name (e.g., 'F#m7', 'C/E', 'Bbmaj9')

        Returns:
            JSON string with the parsed parts

        Example:
            music_parse_chord(chord="C/E")
        """
        try:
            parsed = parse_chord(chord)
            return json.dumps(
                {
                    "status": "success",
                    "chord": chord,
                    "root": parsed.root,
                    "suffix": parsed.suffix,
                    "bass": parsed.bass,
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to parse chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_parse_chord"] = music_parse_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_transpose_chord(
        chord: str,
        from_key: str,
        to_key: str,
        use_flats: bool = False,
    ) -> str:
        """
        Transpose a chord between keys.

        Root and bass are re-spelled for the target key; the quality
        suffix is kept as written.

        Args:
            chord: Chord name
            from_key: Key the chord is written in (e.g., 'C')
            to_key: Target key (e.g., 'Eb')
            use_flats: Prefer flats when the target key is C

        Returns:
            JSON string with the transposed chord

        Example:
            music_transpose_chord(chord="Dm7", from_key="C", to_key="Eb")
        """
        try:
            transposed = transpose_chord(chord, from_key, to_key, use_flats)
            return json.dumps(
                {
                    "status": "success",
                    "chord": chord,
                    "from_key": from_key,
                    "to_key": to_key,
                    "transposed": transposed,
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to transpose chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_transpose_chord"] = music_transpose_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_chord_notes(chord: str) -> str:
        """
        Spell the notes of a chord.

        Spelling follows the chord's degrees, so Fm7 is F Ab C Eb and
        Cdim7 is C Eb Gb Bbb. A slash bass is listed first.

        Args:
            chord: Chord name

        Returns:
            JSON string with the spelled notes

        Example:
            music_chord_notes(chord="Fm7")
        """
        try:
            notes = chord_to_notes(chord)
            return json.dumps({"status": "success", "chord": chord, "notes": notes})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to spell chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_chord_notes"] = music_chord_notes

    @mcp.tool  # type: ignore[arg-type]
    async def music_chord_pitches(
        root: str,
        quality: str,
        octave: int = 4,
        inversion: str | None = None,
    ) -> str:
        """
        Generate octave-qualified pitches for notation.

        Args:
            root: Root note (e.g., 'F', 'Db')
            quality: Quality token or name ('m7', 'minor7', 'half-diminished7')
            octave: Written octave of the root
            inversion: Optional 'root', 'first', 'second' or 'third'

        Returns:
            JSON string with pitches (bass first) and a figured-bass display name

        Example:
            music_chord_pitches(root="F", quality="half-diminished7", octave=3)
        """
        try:
            if inversion not in (None, "root", "first", "second", "third"):
                return json.dumps(
                    {"status": "error", "message": f"Invalid inversion: {inversion}"}
                )
            result = generate_chord_pitches(root, quality, octave, inversion)  # type: ignore[arg-type]
            return json.dumps(
                {
                    "status": "success",
                    "pitches": [asdict(pitch) for pitch in result.pitches],
                    "display_name": result.display_name,
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to generate chord pitches")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_chord_pitches"] = music_chord_pitches

    @mcp.tool  # type: ignore[arg-type]
    async def music_chord_qualities() -> str:
        """
        List every chord quality the spelling engine knows.

        Returns:
            JSON string with the quality tokens

        Example:
            music_chord_qualities()
        """
        try:
            qualities = get_chord_qualities()
            return json.dumps(
                {"status": "success", "qualities": qualities, "count": len(qualities)}
            )
        except Exception as e:
            logger.exception("Failed to list chord qualities")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_chord_qualities"] = music_chord_qualities

    @mcp.tool  # type: ignore[arg-type]
    async def music_diatonic_chords(
        key: str,
        mode: str = "major",
        use_flats: bool = False,
    ) -> str:
        """
        Get the chord palette for a key.

        Args:
            key: Key root (e.g., 'G', 'Bb')
            mode: 'major', 'minor', or 'initial' (common borrowed chords
                followed by the major diatonic set)
            use_flats: Prefer flats when the key is C

        Returns:
            JSON string with the chords

        Example:
            music_diatonic_chords(key="G")
        """
        try:
            if mode == "major":
                chords = get_diatonic_chords(key, use_flats)
            elif mode == "minor":
                chords = get_minor_diatonic_chords(key, use_flats)
            elif mode == "initial":
                chords = get_initial_chords(key, use_flats)
            else:
                return json.dumps(
                    {
                        "status": "error",
                        "message": f"Invalid mode: {mode}. Use 'major', 'minor' or 'initial'",
                    }
                )
            return json.dumps({"status": "success", "key": key, "mode": mode, "chords": chords})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to get diatonic chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_diatonic_chords"] = music_diatonic_chords

    @mcp.tool  # type: ignore[arg-type]
    async def music_validate_chord(
        text: str,
        key: str = "C",
        use_flats: bool = False,
    ) -> str:
        """
        Validate free-text input as a chord name or Roman numeral.

        Input starting with A-G is a chord name; anything else is resolved
        as a Roman numeral in the key.

        Args:
            text: User input (e.g., 'F#m7', 'bVII', 'ii7')
            key: Key used to resolve numerals
            use_flats: Prefer flats when the key is C

        Returns:
            JSON string with isValid, chord, normalizedChord, error, inputType

        Example:
            music_validate_chord(text="bVII", key="C")
        """
        try:
            result = validate_chord_input(text, key, use_flats)
            return json.dumps({"status": "success", **result.to_dict()})
        except Exception as e:
            logger.exception("Failed to validate chord input")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_validate_chord"] = music_validate_chord

    return tools
