"""Tests for the voice adapters and voice input through the controller."""

import asyncio

import pytest

from orchestrator.controller import WizardController
from orchestrator.exceptions import UnsupportedCapability
from prompts.screen_prompts import LISTEN_TIMEOUT_NOTICE, VOICE_INPUT_UNSUPPORTED_NOTICE
from tools.voice import ConsoleVoice, RecordingVoice, SilentVoice, VoiceCapability


class TestAdapters:
    """Tests for capability variants."""

    def test_silent_voice_supports_nothing(self) -> None:
        voice = SilentVoice()
        assert voice.speech_output is VoiceCapability.UNSUPPORTED
        assert voice.speech_input is VoiceCapability.UNSUPPORTED
        voice.speak("hello", "en-US")

    def test_recording_voice_without_transcripts(self) -> None:
        voice = RecordingVoice()
        assert voice.speech_output is VoiceCapability.SUPPORTED
        assert voice.speech_input is VoiceCapability.UNSUPPORTED

    def test_recording_voice_drain(self) -> None:
        voice = RecordingVoice(keep_history=True)
        voice.speak("one", "en-US")
        voice.speak("two", "hi-IN")
        assert [r.text for r in voice.drain()] == ["one", "two"]
        assert voice.drain() == []
        assert len(voice.requests) == 2

    def test_recording_voice_keeps_only_pending_by_default(self) -> None:
        voice = RecordingVoice()
        voice.speak("one", "en-US")
        assert voice.requests is None
        assert len(voice.drain()) == 1
        assert voice.drain() == []

    def test_console_voice_prints(self, capsys) -> None:
        ConsoleVoice().speak("Face captured!", "en-US")
        assert "Face captured!" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_unsupported_listen_raises(self) -> None:
        with pytest.raises(UnsupportedCapability) as excinfo:
            await SilentVoice().listen_once("en-US")
        assert excinfo.value.notice == VOICE_INPUT_UNSUPPORTED_NOTICE

    @pytest.mark.asyncio
    async def test_scripted_transcripts(self) -> None:
        voice = RecordingVoice(transcripts=["what is kyc?"])
        assert voice.speech_input is VoiceCapability.SUPPORTED
        assert await voice.listen_once("en-US") == "what is kyc?"


class TestListenForQuery:
    """Tests for WizardController.listen_for_query()."""

    @pytest.mark.asyncio
    async def test_transcript_fills_query(self, connectivity, settings) -> None:
        voice = RecordingVoice(transcripts=["Is my data safe?"])
        controller = WizardController(voice, connectivity, settings=settings)
        for target in (1, 2, 7, 6, 8):
            controller.advance(target)

        assert await controller.listen_for_query() == "Is my data safe?"
        assert controller.assistant_query == "Is my data safe?"
        assert controller.listening is False
        assert controller.current_step == 8

    @pytest.mark.asyncio
    async def test_unsupported_produces_notice(self, controller: WizardController) -> None:
        with pytest.raises(UnsupportedCapability):
            await controller.listen_for_query()
        assert controller.screen().notice == VOICE_INPUT_UNSUPPORTED_NOTICE

    @pytest.mark.asyncio
    async def test_timeout_leaves_state_alone(self, connectivity, settings) -> None:
        voice = RecordingVoice(transcripts=[])
        controller = WizardController(voice, connectivity, settings=settings)
        controller.set_query("typed already")

        result = await asyncio.wait_for(controller.listen_for_query(), timeout=5)

        assert result is None
        assert controller.assistant_query == "typed already"
        assert controller.notice == LISTEN_TIMEOUT_NOTICE
        assert controller.listening is False
        assert controller.current_step == 0

    def test_capability_resolved_at_construction(self, connectivity, settings) -> None:
        voice = RecordingVoice()
        controller = WizardController(voice, connectivity, settings=settings)
        voice.speech_input = VoiceCapability.SUPPORTED
        assert controller.speech_input_supported is False
