"""
Voicing Session Manager - one continuity state per playback session.

Voice leading depends on the previous chord, so concurrent playbacks
must never share a VoicingSession. The manager hands out a session per
name and keeps it until it is reset or deleted.
"""

from __future__ import annotations

import logging

from chuk_mcp_harmony.core.voicing import AudioNote, VoicingSession

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "default"


class SessionManager:
    """
    Manages named VoicingSessions.

    All operations are async-ready to match the tool layer; none of them
    block.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, VoicingSession] = {}

    async def get_or_create(self, name: str = DEFAULT_SESSION) -> VoicingSession:
        """
        Get a session by name, creating an empty one if needed.

        Args:
            name: Session name

        Returns:
            The VoicingSession for that name
        """
        session = self._sessions.get(name)
        if session is None:
            logger.debug(f"Creating voicing session {name!r}")
            session = VoicingSession()
            self._sessions[name] = session
        return session

    async def get(self, name: str) -> VoicingSession | None:
        """Get an existing session, or None."""
        return self._sessions.get(name)

    async def reset(self, name: str = DEFAULT_SESSION) -> bool:
        """
        Clear a session's previous voicing.

        Returns:
            True if the session existed
        """
        session = self._sessions.get(name)
        if session is None:
            return False
        session.reset()
        return True

    async def delete(self, name: str) -> bool:
        """Drop a session entirely. Returns True if it existed."""
        return self._sessions.pop(name, None) is not None

    def list_sessions(self) -> list[str]:
        """Names of all live sessions, sorted."""
        return sorted(self._sessions)

    def previous_voicing(self, name: str) -> list[AudioNote] | None:
        """The last voicing a session produced, if any."""
        session = self._sessions.get(name)
        if session is None or session.previous is None:
            return None
        return list(session.previous)
