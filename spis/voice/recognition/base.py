"""Abstract base class for speech transcription providers.

Audio capture and the recognition engine live outside this package; a
provider only has to hand back a finished TranscriptionResult.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from spis.voice.models import RoutedCommand, TranscriptionResult


class BaseTranscriber(ABC):
    """Abstract base for all transcription providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g. 'vosk', 'whisper')."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether this provider is currently usable (model loaded etc.)."""

    @abstractmethod
    def transcribe(
        self,
        audio_data: bytes,
        language: str = "pl",
        **kwargs,
    ) -> TranscriptionResult:
        """Transcribe one recorded utterance to text."""

    def transcribe_and_route(
        self,
        router,
        audio_data: bytes,
        force_code_mode: bool = False,
        **kwargs,
    ) -> RoutedCommand:
        """Transcribe an utterance and route the transcript to a command."""
        from spis.voice.parser.command_router import route_transcription

        transcription = self.transcribe(audio_data, **kwargs)
        return route_transcription(router, transcription, force_code_mode=force_code_mode)
