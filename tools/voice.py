"""
Voice I/O adapters.

The wizard only needs two capabilities from its environment: fire-and-forget
speech playback and single-shot speech capture. Whether each one is available
is decided once, when the adapter is built, and exposed as a VoiceCapability.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from datetime import datetime
from enum import Enum
from typing import Deque, Iterable, List, Optional

from pydantic import BaseModel, Field

from orchestrator.exceptions import UnsupportedCapability
from prompts.screen_prompts import VOICE_INPUT_UNSUPPORTED_NOTICE

logger = logging.getLogger(__name__)


class VoiceCapability(str, Enum):
    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"


class SpeechRequest(BaseModel):
    """A single playback request handed to the voice adapter."""
    text: str
    language_tag: str
    requested_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())


class VoiceIO(ABC):
    """Contract for speech playback and capture used by the wizard."""

    speech_output: VoiceCapability = VoiceCapability.UNSUPPORTED
    speech_input: VoiceCapability = VoiceCapability.UNSUPPORTED

    @abstractmethod
    def speak(self, text: str, language_tag: str) -> None:
        """
        Request playback of `text`. Returns immediately; a later call may
        interrupt an earlier one that is still playing.
        """
        pass

    async def listen_once(self, language_tag: str) -> str:
        """Capture a single utterance and return its transcript."""
        raise UnsupportedCapability("speech_input", VOICE_INPUT_UNSUPPORTED_NOTICE)


class SilentVoice(VoiceIO):
    """Adapter for environments with neither speech playback nor recognition."""

    def speak(self, text: str, language_tag: str) -> None:
        logger.debug(f"Speech output unavailable, dropping: {text!r}")


class RecordingVoice(VoiceIO):
    """
    Holds playback requests until drain() hands them to a remote client.

    With keep_history, every request is also kept in `requests` for the
    adapter's lifetime. Optionally serves a fixed list of transcripts from
    listen_once, which makes speech input available; without transcripts
    speech input is unsupported.
    """
    speech_output = VoiceCapability.SUPPORTED

    def __init__(self, transcripts: Optional[Iterable[str]] = None, keep_history: bool = False):
        self.requests: Optional[List[SpeechRequest]] = [] if keep_history else None
        self._pending: List[SpeechRequest] = []
        self._transcripts: Optional[Deque[str]] = None
        if transcripts is not None:
            self._transcripts = deque(transcripts)
            self.speech_input = VoiceCapability.SUPPORTED

    def speak(self, text: str, language_tag: str) -> None:
        request = SpeechRequest(text=text, language_tag=language_tag)
        if self.requests is not None:
            self.requests.append(request)
        self._pending.append(request)

    def drain(self) -> List[SpeechRequest]:
        """Return the requests made since the last drain."""
        pending, self._pending = self._pending, []
        return pending

    async def listen_once(self, language_tag: str) -> str:
        if self._transcripts is None:
            return await super().listen_once(language_tag)
        if not self._transcripts:
            # Nothing more to hear; behave like a recogniser that never fires.
            await _never()
        return self._transcripts.popleft()


class ConsoleVoice(VoiceIO):
    """Prints speech to the terminal; used by the command-line wizard."""
    speech_output = VoiceCapability.SUPPORTED

    def speak(self, text: str, language_tag: str) -> None:
        print(f"🔊 [{language_tag}] {text}")


async def _never() -> None:
    await asyncio.Event().wait()
