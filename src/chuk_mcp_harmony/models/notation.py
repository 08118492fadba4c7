"""
Notation models - what crosses the boundary to UI and worksheet consumers.

These are plain records: chord strings, numerals and validation outcomes.
Field aliases match the camelCase names the front end expects.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_harmony.constants import InputType


class ChordValidationResult(BaseModel):
    """
    Outcome of validating free-text chord input.

    Input may be a chord name ('F#m7') or a Roman numeral ('bVII');
    input_type records which one matched.
    """

    valid: bool = Field(..., alias="isValid", description="Whether the input was understood")
    chord: str | None = Field(None, description="Chord as entered or resolved")
    normalized_chord: str | None = Field(
        None, alias="normalizedChord", description="Chord name to store"
    )
    message: str | None = Field(None, alias="error", description="Why the input was rejected")
    input_type: InputType | None = Field(
        None, alias="inputType", description="'chord' or 'numeral'"
    )

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def invalid(cls, message: str | None = None) -> ChordValidationResult:
        """Build a rejected result."""
        return cls(valid=False, message=message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the front-end field names."""
        return self.model_dump(by_alias=True)


class ChordNotation(BaseModel):
    """
    Display-ready chord: the chord name and its Roman numeral.

    This is the authoritative representation for rendering chords to users.
    """

    chord: str = Field(..., description="Chord name, spelled as given")
    numeral: str = Field(..., description="Spelling-preserving Roman numeral")

    model_config = {"frozen": True}


class ProgressionStep(BaseModel):
    """One chord of an analysed progression."""

    chord: str
    numeral: str = Field(..., description="Display numeral (spelling-preserving)")
    lookup_numeral: str = Field(..., description="Enharmonic-folded numeral for lookups")
    notes: list[str] = Field(default_factory=list, description="Spelled chord tones")


class ProgressionAnalysis(BaseModel):
    """
    A progression analysed in a key.

    Carries everything the notation and recommendation collaborators
    need: per-chord numerals and notes plus the key-agnostic encoding.
    """

    key: str = Field(..., description="Key the numerals are relative to")
    use_flats: bool = Field(False, description="Spelling preference for neutral keys")
    steps: list[ProgressionStep] = Field(default_factory=list)
    interval_key: str | None = Field(None, description="Key-agnostic interval encoding")

    def to_yaml_dict(self) -> dict[str, Any]:
        """
        Convert to a YAML-friendly dict.

        Steps are flattened so the worksheet side can read them directly.
        """
        return {
            "key": self.key,
            "use_flats": self.use_flats,
            "interval_key": self.interval_key,
            "chords": [
                {
                    "chord": step.chord,
                    "numeral": step.numeral,
                    "lookup": step.lookup_numeral,
                    "notes": list(step.notes),
                }
                for step in self.steps
            ],
        }
