import logging
from typing import Optional, Sequence

from models.assistant import AssistantEntry
from prompts.assistant_prompts import FALLBACK_ANSWER, KNOWLEDGE_BASE
from tools.voice import VoiceIO

logger = logging.getLogger(__name__)


class AssistantMatcher:
    """
    Answers free-text help questions from a fixed knowledge base.

    An entry matches when its question, lower-cased, appears anywhere inside
    the lower-cased query. The first matching entry in knowledge-base order
    wins; there is no scoring. Every answer, including the fallback, is handed
    to the voice adapter exactly once.
    """
    def __init__(
        self,
        voice: VoiceIO,
        knowledge_base: Sequence[AssistantEntry] = KNOWLEDGE_BASE,
        fallback_answer: str = FALLBACK_ANSWER,
        language_tag: str = "en-US"
    ):
        self.voice = voice
        self.knowledge_base = tuple(knowledge_base)
        self.fallback_answer = fallback_answer
        self.language_tag = language_tag

    def find_entry(self, query_text: str) -> Optional[AssistantEntry]:
        query = (query_text or "").lower()
        for entry in self.knowledge_base:
            if entry.question.lower() in query:
                return entry
        return None

    def match(self, query_text: str, language_tag: Optional[str] = None) -> str:
        entry = self.find_entry(query_text)
        answer = entry.answer if entry else self.fallback_answer
        if entry is None:
            logger.info(f"No knowledge base entry for query: {query_text!r}")
        self.voice.speak(answer, language_tag or self.language_tag)
        return answer
