"""Exceptions raised at the audio file boundary.

Every error carries a short ``code`` naming the failed check, so the API
and the scripts can report it without parsing messages.
"""

from typing import Any


class AudioIOError(Exception):
    """Base exception for audio I/O errors.

    Attributes:
        message: Human-readable error description.
        code: Short error code string (e.g., "INVALID_WAV").
        details: Additional context, empty when there is none.
    """

    default_code = "AUDIO_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Return ``{"error", "code", "details"}`` for JSON output."""
        return {"error": self.message, "code": self.code, "details": self.details}

    def __str__(self) -> str:
        if not self.details:
            return f"[{self.code}] {self.message}"
        return f"[{self.code}] {self.message} (details: {self.details})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, details={self.details!r})"


class AudioDecodeError(AudioIOError):
    """Input could not be read as audio.

    Codes: FILE_NOT_FOUND, EMPTY_FILE, INVALID_WAV, EMPTY_AUDIO.
    """

    default_code = "INVALID_WAV"


class AudioValidationError(AudioIOError):
    """Decoded audio is outside what the codec accepts.

    Codes: INVALID_DTYPE, EMPTY_AUDIO, NON_FINITE, INVALID_SAMPLE_RATE,
    TOO_MANY_CHANNELS, TOO_LONG.
    """

    default_code = "INVALID_AUDIO"


class AudioEncodeError(AudioIOError):
    """A waveform could not be written as WAV.

    Codes: INVALID_SHAPE, INVALID_SUBTYPE, ENCODE_FAILED.
    """

    default_code = "ENCODE_FAILED"
