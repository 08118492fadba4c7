"""
Exception taxonomy for the harmony engine.

Every failure the core can produce is a MusicError. They subclass ValueError
so callers that only care about bad input can catch that instead.
"""


class MusicError(ValueError):
    """Base class for all music theory errors."""


class InvalidChordError(MusicError):
    """A chord string could not be parsed."""

    def __init__(self, chord: str) -> None:
        super().__init__(f"Invalid chord: {chord}")
        self.chord = chord


class InvalidKeyError(MusicError):
    """A key name is not recognised."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Invalid key: {key}")
        self.key = key


class UnknownNoteError(InvalidKeyError):
    """A note name is not in the registry."""

    def __init__(self, note: str) -> None:
        MusicError.__init__(self, f"Unknown note: {note}")
        self.key = note
        self.note = note


class InvalidRomanNumeralError(MusicError):
    """A Roman numeral string could not be parsed."""

    def __init__(self, numeral: str) -> None:
        super().__init__(f"Invalid roman numeral: {numeral}")
        self.numeral = numeral


class ParseError(MusicError):
    """Generic parsing failure with context."""

    def __init__(self, context: str) -> None:
        super().__init__(f"Parsing error: {context}")
        self.context = context


class UnknownQualityError(ParseError):
    """A chord quality token is not in the canonical vocabulary."""

    def __init__(self, quality: str) -> None:
        MusicError.__init__(self, f"Unknown chord quality: {quality}")
        self.context = quality
        self.quality = quality


class VoiceLeadingError(MusicError):
    """Voicing could not be produced."""

    def __init__(self, context: str) -> None:
        super().__init__(f"Voice leading failed: {context}")
        self.context = context
