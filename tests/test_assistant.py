"""Tests for AssistantMatcher."""

import pytest

from agent.assistant_agent import AssistantMatcher
from models.assistant import AssistantEntry
from prompts.assistant_prompts import FALLBACK_ANSWER, KNOWLEDGE_BASE
from tools.voice import RecordingVoice


@pytest.fixture
def matcher(voice: RecordingVoice) -> AssistantMatcher:
    return AssistantMatcher(voice)


class TestKnowledgeBase:
    """Tests for the shipped knowledge base."""

    def test_required_questions_present(self) -> None:
        questions = [entry.question for entry in KNOWLEDGE_BASE]
        assert questions[:3] == ["What is KYC?", "Why do I need KYC?", "Is my data safe?"]

    def test_entries_are_immutable(self) -> None:
        with pytest.raises(Exception):
            KNOWLEDGE_BASE[0].answer = "changed"


class TestMatch:
    """Tests for first-match substring matching."""

    def test_case_insensitive_containment(self, matcher: AssistantMatcher) -> None:
        assert matcher.match("what is kyc??") == KNOWLEDGE_BASE[0].answer

    def test_question_embedded_in_longer_query(self, matcher: AssistantMatcher) -> None:
        assert matcher.match("Hello, WHY DO I NEED KYC? please tell") == KNOWLEDGE_BASE[1].answer

    def test_no_match_returns_fallback(self, matcher: AssistantMatcher) -> None:
        assert matcher.match("banana") == FALLBACK_ANSWER

    def test_empty_query_returns_fallback(self, matcher: AssistantMatcher) -> None:
        assert matcher.match("") == FALLBACK_ANSWER

    def test_partial_question_does_not_match(self, matcher: AssistantMatcher) -> None:
        # The whole question has to appear inside the query, not the reverse
        assert matcher.match("kyc") == FALLBACK_ANSWER

    def test_first_match_wins(self, voice: RecordingVoice) -> None:
        matcher = AssistantMatcher(voice, knowledge_base=[
            AssistantEntry(question="kyc", answer="first"),
            AssistantEntry(question="what is kyc", answer="second"),
        ])
        assert matcher.match("what is kyc") == "first"

    def test_deterministic(self, matcher: AssistantMatcher) -> None:
        answers = {matcher.match("Is my data safe?") for _ in range(5)}
        assert answers == {KNOWLEDGE_BASE[2].answer}

    def test_custom_fallback(self, voice: RecordingVoice) -> None:
        matcher = AssistantMatcher(voice, fallback_answer="Ask again")
        assert matcher.match("banana") == "Ask again"


class TestMatchSpeech:
    """Every match requests exactly one playback."""

    def test_speaks_answer(self, matcher: AssistantMatcher, voice: RecordingVoice) -> None:
        matcher.match("What is KYC?")
        assert [r.text for r in voice.requests] == [KNOWLEDGE_BASE[0].answer]
        assert voice.requests[0].language_tag == "en-US"

    def test_speaks_fallback(self, matcher: AssistantMatcher, voice: RecordingVoice) -> None:
        matcher.match("banana")
        assert [r.text for r in voice.requests] == [FALLBACK_ANSWER]

    def test_language_tag_override(self, matcher: AssistantMatcher, voice: RecordingVoice) -> None:
        matcher.match("banana", "hi-IN")
        assert voice.requests[0].language_tag == "hi-IN"

    def test_one_request_per_call(self, matcher: AssistantMatcher, voice: RecordingVoice) -> None:
        for query in ("What is KYC?", "banana", "Is my data safe?"):
            matcher.match(query)
        assert len(voice.requests) == 3
