"""
Voicing tools - MCP tools for playable voicings and MIDI previews.

Lead voicing is stateful: each named session remembers its last chord
so the next one moves as little as possible.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_harmony.compiler import voicings_to_midi
from chuk_mcp_harmony.constants import ErrorMessages, VoicingStyle
from chuk_mcp_harmony.core import (
    AudioNote,
    VoicingSession,
    chord_to_notes,
    parse_chord,
    voice_notes,
)
from chuk_mcp_harmony.sessions import DEFAULT_SESSION, SessionManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _parse_style(style: str) -> VoicingStyle | None:
    try:
        return VoicingStyle(style)
    except ValueError:
        return None


def _invalid_style(style: str) -> str:
    valid = ", ".join(f"'{s.value}'" for s in VoicingStyle)
    return json.dumps({"status": "error", "message": f"Invalid style: {style}. Use {valid}"})


def _audio_note_dict(audio_note: AudioNote) -> dict[str, Any]:
    return {"note": audio_note.note, "octave": audio_note.octave, "midi": audio_note.midi}


def voice_chord_name(
    chord: str,
    style: VoicingStyle,
    base_octave: int,
    session: VoicingSession | None = None,
) -> list[AudioNote]:
    """
    Spell a chord and voice it.

    The bass is the slash bass when there is one, otherwise the root.
    """
    notes = chord_to_notes(chord)
    parsed = parse_chord(chord)
    bass = parsed.bass if parsed.bass is not None else notes[0]
    return voice_notes(notes, bass, base_octave, style, session)


def register_voicing_tools(
    mcp: ChukMCPServer,
    sessions: SessionManager,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register voicing and MIDI preview tools with the MCP server.

    Args:
        mcp: The MCP server instance
        sessions: The voicing session manager
        output_dir: Directory for MIDI previews

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_voice_chord(
        chord: str,
        style: str = "lead",
        base_octave: int = 3,
        session: str = DEFAULT_SESSION,
    ) -> str:
        """
        Voice a chord as playable (note, octave) pairs.

        'close' and 'wide' voice the chord on its own. 'lead' keeps the
        upper voices near the previous chord voiced in the same session;
        the bass always sits in octave 2.

        Args:
            chord: Chord name (e.g., 'Cmaj7', 'G/B')
            style: 'close', 'wide' or 'lead'
            base_octave: Octave for the first note (close/wide) or the fallback (lead)
            session: Session name for lead voicing

        Returns:
            JSON string with the voiced notes, bass first

        Example:
            music_voice_chord(chord="G7", style="lead", session="verse")
        """
        try:
            voicing_style = _parse_style(style)
            if voicing_style is None:
                return _invalid_style(style)

            voicing_session = None
            if voicing_style == VoicingStyle.LEAD:
                voicing_session = await sessions.get_or_create(session)

            voiced = voice_chord_name(chord, voicing_style, base_octave, voicing_session)
            return json.dumps(
                {
                    "status": "success",
                    "chord": chord,
                    "style": voicing_style.value,
                    "notes": [_audio_note_dict(n) for n in voiced],
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to voice chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_voice_chord"] = music_voice_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_voice_progression(
        chords: list[str],
        style: str = "lead",
        base_octave: int = 3,
        session: str | None = None,
    ) -> str:
        """
        Voice a whole progression.

        With 'lead' and no session name, a fresh session is used and
        thrown away afterwards. With a session name, voicing continues
        from that session's last chord.

        Args:
            chords: Chord names in order
            style: 'close', 'wide' or 'lead'
            base_octave: Octave for the first note (close/wide) or the fallback (lead)
            session: Optional session name to continue from

        Returns:
            JSON string with one voicing per chord

        Example:
            music_voice_progression(chords=["C", "Am", "F", "G"])
        """
        try:
            voicing_style = _parse_style(style)
            if voicing_style is None:
                return _invalid_style(style)

            voicing_session: VoicingSession | None = None
            if voicing_style == VoicingStyle.LEAD:
                if session is None:
                    voicing_session = VoicingSession()
                else:
                    voicing_session = await sessions.get_or_create(session)

            voicings = [
                {
                    "chord": chord,
                    "notes": [
                        _audio_note_dict(n)
                        for n in voice_chord_name(chord, voicing_style, base_octave, voicing_session)
                    ],
                }
                for chord in chords
            ]
            return json.dumps(
                {"status": "success", "style": voicing_style.value, "voicings": voicings}
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to voice progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_voice_progression"] = music_voice_progression

    @mcp.tool  # type: ignore[arg-type]
    async def music_reset_voicing(session: str = DEFAULT_SESSION) -> str:
        """
        Reset a session's voice leading.

        Call this when starting a new progression or changing key; the
        next lead voicing is placed fresh above the bass.

        Args:
            session: Session name

        Returns:
            JSON string confirming the reset

        Example:
            music_reset_voicing(session="verse")
        """
        try:
            if not await sessions.reset(session):
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.SESSION_NOT_FOUND.format(name=session)}
                )
            return json.dumps(
                {"status": "success", "message": f"Reset voicing session: {session}"}
            )
        except Exception as e:
            logger.exception("Failed to reset voicing")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_reset_voicing"] = music_reset_voicing

    @mcp.tool  # type: ignore[arg-type]
    async def music_export_progression_midi(
        chords: list[str],
        output_name: str = "progression",
        style: str = "lead",
        base_octave: int = 3,
        tempo: int = 90,
        beats_per_chord: float = 4.0,
    ) -> str:
        """
        Voice a progression and save it as a block-chord MIDI file.

        Args:
            chords: Chord names in order
            output_name: Output filename (without .mid extension)
            style: 'close', 'wide' or 'lead'
            base_octave: Octave for the first note (close/wide) or the fallback (lead)
            tempo: Tempo in BPM
            beats_per_chord: How long each chord is held

        Returns:
            JSON string with the file path

        Example:
            music_export_progression_midi(chords=["Dm7", "G7", "Cmaj7"], output_name="ii-V-I")
        """
        try:
            voicing_style = _parse_style(style)
            if voicing_style is None:
                return _invalid_style(style)
            if not chords:
                return json.dumps({"status": "error", "message": "No chords to export"})

            voicing_session = VoicingSession() if voicing_style == VoicingStyle.LEAD else None
            voicings = [
                voice_chord_name(chord, voicing_style, base_octave, voicing_session)
                for chord in chords
            ]

            midi_file = voicings_to_midi(
                voicings, tempo_bpm=tempo, beats_per_chord=beats_per_chord
            )

            output_path = output_dir / f"{output_name}.mid"
            output_dir.mkdir(parents=True, exist_ok=True)
            midi_file.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "chords": len(chords),
                    "message": f"Exported {len(chords)} chords at {tempo} BPM",
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to export progression MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_export_progression_midi"] = music_export_progression_midi

    return tools
