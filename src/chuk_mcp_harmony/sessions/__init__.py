"""
Playback session management.

This module provides:
- SessionManager: Named VoicingSessions for concurrent playbacks
"""

from chuk_mcp_harmony.sessions.manager import DEFAULT_SESSION, SessionManager

__all__ = [
    "DEFAULT_SESSION",
    "SessionManager",
]
