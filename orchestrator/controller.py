import asyncio
import logging
from typing import Callable, Optional

from agent.assistant_agent import AssistantMatcher
from config.settings import Settings, get_settings
from models.steps import ScreenContext, ScreenView, StepDescriptor, WizardStep
from orchestrator.catalog import (
    FINAL_STEP,
    INITIAL_STEP,
    METHOD_ENTRY_STEPS,
    STEP_CATALOG,
)
from orchestrator.exceptions import ActionNotAllowed, InvalidInput, InvalidTransition, UnsupportedCapability
from prompts.screen_prompts import (
    DOCUMENT_UPLOADED_ANNOUNCEMENT,
    FACE_CAPTURED_ANNOUNCEMENT,
    HELP_TITLE,
    LISTEN_TIMEOUT_NOTICE,
    METHOD_LABELS,
    METHOD_SELECTED_ANNOUNCEMENT,
    OFFLINE_BADGE,
    ONLINE_BADGE,
    VOICE_INPUT_UNSUPPORTED_NOTICE,
    WELCOME_ANNOUNCEMENT,
)
from state import DocumentMethod, Language, VerificationRecord
from tools.capture_tools import FACE_CAPTURE_MARKER
from tools.connectivity import ConnectivitySignal
from tools.voice import VoiceCapability, VoiceIO

logger = logging.getLogger(__name__)

NAME_CAPTURE_STEPS = frozenset({
    WizardStep.SPLASH,
    WizardStep.METHOD_SELECTION,
    WizardStep.DIGITAL_LOCKER_CAPTURE,
    WizardStep.NATIONAL_ID_ENTRY,
    WizardStep.FACE_CAPTURE,
})


class WizardController:
    """
    Owns the current step and the VerificationRecord of one wizard session
    and mediates every transition between screens.

    All operations run to completion synchronously; listen_for_query is the
    only coroutine, and it touches state only after the transcript arrives.
    """
    def __init__(
        self,
        voice: VoiceIO,
        connectivity: ConnectivitySignal,
        settings: Optional[Settings] = None,
        matcher: Optional[AssistantMatcher] = None
    ):
        self.settings = settings or get_settings()
        self.voice = voice
        self.matcher = matcher or AssistantMatcher(voice, language_tag=self.settings.primary_language_tag)

        self.current_step: WizardStep = INITIAL_STEP
        self.record = VerificationRecord()

        # Screen-local state, not part of the verification record
        self.show_help = False
        self.assistant_query = ""
        self.assistant_answer = ""
        self.notice: Optional[str] = None
        self.listening = False

        # Capabilities are resolved once here and never checked again
        self.speech_output_supported = voice.speech_output is VoiceCapability.SUPPORTED
        self.speech_input_supported = voice.speech_input is VoiceCapability.SUPPORTED

        self.online = connectivity.online
        self._unsubscribe: Optional[Callable[[], None]] = connectivity.on_change(self._on_connectivity_change)

# -------------------------------------------------------------------------------------------------
# PUBLIC FUNCTIONS
# -------------------------------------------------------------------------------------------------

    @property
    def descriptor(self) -> StepDescriptor:
        return STEP_CATALOG[self.current_step]

    @property
    def language_tag(self) -> str:
        return self.settings.language_tag(self.record.preferred_language)

    def select_method(self, method: DocumentMethod) -> WizardStep:
        """Record the chosen KYC method and move to its capture screen."""
        self._require_step("select_method", WizardStep.METHOD_SELECTION)
        method = DocumentMethod(method)
        if method not in METHOD_ENTRY_STEPS:
            raise ActionNotAllowed("select_method", int(self.current_step), f"'{method.value}' is not a KYC method")

        self.record.document_method = method
        entry_step = self.advance(METHOD_ENTRY_STEPS[method])
        self._speak(METHOD_SELECTED_ANNOUNCEMENT.format(method=METHOD_LABELS[method.value]))
        return entry_step

    def record_identifier(self, value: str) -> None:
        """
        Store the captured artifact for the active method. The value is not
        format-checked here; any non-empty string is accepted.
        """
        required = self.descriptor.required_method
        if required is None or required != self.record.document_method:
            raise ActionNotAllowed(
                "record_identifier",
                int(self.current_step),
                f"active method is '{self.record.document_method.value}'"
            )
        if not value:
            raise InvalidInput("Identifier value must not be empty")

        self.record.document_identifier = value
        if required == DocumentMethod.FACE_CAPTURE:
            self.record.face_artifact_present = True
            self._speak(FACE_CAPTURED_ANNOUNCEMENT)
        elif required == DocumentMethod.DIGITAL_LOCKER:
            self._speak(DOCUMENT_UPLOADED_ANNOUNCEMENT)
        logger.info(f"Identifier recorded for method {required.value}")

    def clear_identifier(self) -> None:
        """Discard the artifact captured on the current screen."""
        required = self.descriptor.required_method
        if required is None or required != self.record.document_method:
            raise ActionNotAllowed("clear_identifier", int(self.current_step))
        self.record.document_identifier = ""
        self.record.face_artifact_present = False

    def capture_face(self) -> WizardStep:
        """Confirm a face capture and go straight to the completion screen."""
        self._require_step("capture_face", WizardStep.FACE_CAPTURE)
        self.record_identifier(FACE_CAPTURE_MARKER)
        return self.advance(WizardStep.CAPTURE_COMPLETE)

    def record_name(self, name: str) -> None:
        if self.current_step not in NAME_CAPTURE_STEPS:
            raise ActionNotAllowed("record_name", int(self.current_step), "name is captured before completion")
        name = (name or "").strip()
        if not name:
            raise InvalidInput("Name must not be empty")
        self.record.subject_name = name

    def advance(self, target_step: int) -> WizardStep:
        """
        Move to `target_step` if the current screen allows it, otherwise raise
        InvalidTransition and leave everything untouched.
        """
        if not self.descriptor.allows(target_step):
            logger.warning(f"Rejected transition {int(self.current_step)} -> {target_step}")
            raise InvalidTransition(int(self.current_step), target_step)

        target = WizardStep(target_step)
        if target == INITIAL_STEP:
            self.restart()
            return self.current_step

        previous = self.current_step
        self.current_step = target
        self.notice = None
        if target > self.record.completion_step:
            self.record.completion_step = int(target)
        logger.info(f"Transition {int(previous)} -> {int(target)}")

        if previous == WizardStep.SPLASH:
            self.show_help = False
            self._speak(WELCOME_ANNOUNCEMENT)
        return self.current_step

    def restart(self) -> None:
        """Back to the splash screen with an empty record. Allowed from any step."""
        self.current_step = INITIAL_STEP
        self.record.reset()
        self.show_help = False
        self.assistant_query = ""
        self.assistant_answer = ""
        self.notice = None
        logger.info("Wizard restarted")

    def toggle_language(self) -> Language:
        self._require_step("toggle_language", INITIAL_STEP)
        if self.record.preferred_language == Language.PRIMARY:
            self.record.preferred_language = Language.SECONDARY
        else:
            self.record.preferred_language = Language.PRIMARY
        return self.record.preferred_language

    def open_help(self) -> None:
        self._require_step("open_help", INITIAL_STEP)
        self.show_help = True

    def close_help(self) -> None:
        self.show_help = False

    def hear_instructions(self) -> Optional[str]:
        instructions = self.descriptor.instructions
        if instructions:
            self._speak(instructions)
        return instructions

    def set_query(self, query_text: str) -> None:
        self.assistant_query = query_text or ""

    def ask(self, query_text: Optional[str] = None) -> str:
        """Answer `query_text` (or the current query) from the knowledge base."""
        if query_text is not None:
            self.set_query(query_text)
        self.assistant_answer = self.matcher.match(self.assistant_query, self.language_tag)
        return self.assistant_answer

    async def listen_for_query(self) -> Optional[str]:
        """
        Fill the query from one spoken utterance.

        Raises UnsupportedCapability when the environment has no speech input.
        Returns None, leaving the query untouched, if nothing is heard before
        the configured timeout.
        """
        if not self.speech_input_supported:
            self.notice = VOICE_INPUT_UNSUPPORTED_NOTICE
            raise UnsupportedCapability("speech_input", VOICE_INPUT_UNSUPPORTED_NOTICE)

        self.listening = True
        try:
            transcript = await asyncio.wait_for(
                self.voice.listen_once(self.language_tag),
                timeout=self.settings.listen_timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(f"No speech heard within {self.settings.listen_timeout_seconds}s")
            self.notice = LISTEN_TIMEOUT_NOTICE
            return None
        finally:
            self.listening = False

        self.notice = None
        self.set_query(transcript)
        return transcript

    def screen(self) -> ScreenView:
        """Render the active step's descriptor."""
        descriptor = self.descriptor
        context = ScreenContext(record=self.record, online=self.online)
        return ScreenView(
            step=int(descriptor.step),
            name=descriptor.name,
            title=descriptor.title,
            body=descriptor.render(context),
            actions=list(descriptor.actions),
            has_instructions=descriptor.instructions is not None and self.speech_output_supported,
            voice_input_available=self.speech_input_supported,
            connectivity_badge=ONLINE_BADGE if self.online else OFFLINE_BADGE,
            online=self.online,
            progress=self.record.completion_step,
            progress_max=int(FINAL_STEP),
            help_title=HELP_TITLE if self.show_help else None,
            help_entries=list(self.matcher.knowledge_base) if self.show_help else [],
            assistant_query=self.assistant_query,
            assistant_answer=self.assistant_answer,
            notice=self.notice,
        )

    def close(self) -> None:
        """Stop listening to the connectivity signal."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

# -------------------------------------------------------------------------------------------------
# PRIVATE FUNCTIONS
# -------------------------------------------------------------------------------------------------

    def _require_step(self, action: str, step: WizardStep) -> None:
        if self.current_step != step:
            logger.warning(f"'{action}' attempted on step {int(self.current_step)}")
            raise ActionNotAllowed(action, int(self.current_step))

    def _speak(self, text: str) -> None:
        self.voice.speak(text, self.language_tag)

    def _on_connectivity_change(self, online: bool) -> None:
        self.online = online
