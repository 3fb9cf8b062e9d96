"""Voice recognition providers."""

from spis.voice.recognition.base import BaseTranscriber

__all__ = [
    "BaseTranscriber",
]
