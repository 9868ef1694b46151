"""
Help knowledge base for the KYC wizard.
Entries are checked in order; the first question found inside a user's query wins.
"""

from typing import Tuple

from models.assistant import AssistantEntry

KNOWLEDGE_BASE: Tuple[AssistantEntry, ...] = (
    AssistantEntry(
        question="What is KYC?",
        answer="KYC means Know Your Customer. It verifies your identity."
    ),
    AssistantEntry(
        question="Why do I need KYC?",
        answer="KYC is needed for security and to use financial services."
    ),
    AssistantEntry(
        question="Is my data safe?",
        answer="Yes, your data is encrypted and protected."
    ),
)

FALLBACK_ANSWER = "Sorry, please ask another question."
