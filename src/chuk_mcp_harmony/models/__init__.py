"""
Pydantic models for the harmony engine.

This module provides:
- ChordValidationResult: Outcome of validating free-text input
- ChordNotation: Chord name plus display numeral
- ProgressionStep / ProgressionAnalysis: An analysed progression
"""

from chuk_mcp_harmony.models.notation import (
    ChordNotation,
    ChordValidationResult,
    ProgressionAnalysis,
    ProgressionStep,
)

__all__ = [
    "ChordNotation",
    "ChordValidationResult",
    "ProgressionAnalysis",
    "ProgressionStep",
]
