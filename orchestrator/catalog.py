"""
Static step catalog for the KYC wizard.

Each screen is described by a StepDescriptor; the controller consults this
table for every transition, so the flow can be read (and tested) here without
touching any rendering code.
"""

from typing import Dict

from models.steps import ScreenContext, StepDescriptor, WizardStep
from state import DocumentMethod
from tools.capture_tools import validate_aadhaar_format
from prompts.screen_prompts import (
    SPLASH_TITLE, SPLASH_BODY,
    METHOD_SELECTION_TITLE, METHOD_SELECTION_BODY, METHOD_SELECTION_INSTRUCTIONS,
    DIGITAL_LOCKER_TITLE, DIGITAL_LOCKER_BODY,
    NATIONAL_ID_TITLE, NATIONAL_ID_BODY, NATIONAL_ID_INSTRUCTIONS,
    FACE_CAPTURE_TITLE, FACE_CAPTURE_BODY, FACE_CAPTURE_INSTRUCTIONS,
    COMPLETION_TITLE, COMPLETION_BODY,
    CONNECTIVITY_TITLE, OFFLINE_MESSAGE, ONLINE_MESSAGE,
    ASSISTANT_TITLE, ASSISTANT_BODY,
)

INITIAL_STEP = WizardStep.SPLASH
FINAL_STEP = WizardStep.ASSISTANT_QUERY


def _static(text: str):
    return lambda context: text


def _render_digital_locker(context: ScreenContext) -> str:
    if context.record.document_identifier:
        return f"{DIGITAL_LOCKER_BODY} Selected file: {context.record.document_identifier}"
    return DIGITAL_LOCKER_BODY


def _render_national_id(context: ScreenContext) -> str:
    entered = context.record.document_identifier
    if entered and validate_aadhaar_format(entered):
        return f"{NATIONAL_ID_BODY} Entered: {entered} 👍"
    if entered:
        return f"{NATIONAL_ID_BODY} Entered: {entered}"
    return NATIONAL_ID_BODY


def _render_connectivity_notice(context: ScreenContext) -> str:
    return ONLINE_MESSAGE if context.online else OFFLINE_MESSAGE


def _completion(step: WizardStep) -> StepDescriptor:
    return StepDescriptor(
        step=step,
        title=COMPLETION_TITLE,
        next_steps={WizardStep.CONNECTIVITY_NOTICE},
        actions=("next",),
        render=_static(COMPLETION_BODY),
    )


STEP_CATALOG: Dict[WizardStep, StepDescriptor] = {
    WizardStep.SPLASH: StepDescriptor(
        step=WizardStep.SPLASH,
        title=SPLASH_TITLE,
        next_steps={WizardStep.METHOD_SELECTION},
        mutates=("preferred_language",),
        actions=("start", "help", "change_language"),
        render=_static(SPLASH_BODY),
    ),
    WizardStep.METHOD_SELECTION: StepDescriptor(
        step=WizardStep.METHOD_SELECTION,
        title=METHOD_SELECTION_TITLE,
        next_steps={
            WizardStep.DIGITAL_LOCKER_CAPTURE,
            WizardStep.NATIONAL_ID_ENTRY,
            WizardStep.FACE_CAPTURE,
        },
        mutates=("document_method",),
        actions=("select_method", "hear_instructions"),
        instructions=METHOD_SELECTION_INSTRUCTIONS,
        render=_static(METHOD_SELECTION_BODY),
    ),
    WizardStep.DIGITAL_LOCKER_CAPTURE: StepDescriptor(
        step=WizardStep.DIGITAL_LOCKER_CAPTURE,
        title=DIGITAL_LOCKER_TITLE,
        next_steps={WizardStep.CAPTURE_COMPLETE},
        required_method=DocumentMethod.DIGITAL_LOCKER,
        mutates=("document_identifier",),
        actions=("upload_document", "next"),
        render=_render_digital_locker,
    ),
    WizardStep.NATIONAL_ID_ENTRY: StepDescriptor(
        step=WizardStep.NATIONAL_ID_ENTRY,
        title=NATIONAL_ID_TITLE,
        next_steps={WizardStep.CAPTURE_COMPLETE},
        required_method=DocumentMethod.NATIONAL_ID_NUMBER,
        mutates=("document_identifier",),
        actions=("enter_number", "keypad", "hear_instructions", "next"),
        instructions=NATIONAL_ID_INSTRUCTIONS,
        render=_render_national_id,
    ),
    WizardStep.FACE_CAPTURE: StepDescriptor(
        step=WizardStep.FACE_CAPTURE,
        title=FACE_CAPTURE_TITLE,
        next_steps={WizardStep.CAPTURE_COMPLETE},
        required_method=DocumentMethod.FACE_CAPTURE,
        mutates=("face_artifact_present", "document_identifier"),
        actions=("capture", "hear_instructions"),
        instructions=FACE_CAPTURE_INSTRUCTIONS,
        render=_static(FACE_CAPTURE_BODY),
    ),
    # Kept for index parity with step 7; no screen leads here.
    WizardStep.COMPLETION: _completion(WizardStep.COMPLETION),
    WizardStep.CONNECTIVITY_NOTICE: StepDescriptor(
        step=WizardStep.CONNECTIVITY_NOTICE,
        title=CONNECTIVITY_TITLE,
        next_steps={WizardStep.ASSISTANT_QUERY},
        actions=("next",),
        render=_render_connectivity_notice,
    ),
    # Every capture method converges here before the connectivity notice.
    WizardStep.CAPTURE_COMPLETE: _completion(WizardStep.CAPTURE_COMPLETE),
    WizardStep.ASSISTANT_QUERY: StepDescriptor(
        step=WizardStep.ASSISTANT_QUERY,
        title=ASSISTANT_TITLE,
        next_steps={WizardStep.SPLASH},
        actions=("ask", "voice_input", "restart"),
        render=_static(ASSISTANT_BODY),
    ),
}

METHOD_ENTRY_STEPS: Dict[DocumentMethod, WizardStep] = {
    DocumentMethod.DIGITAL_LOCKER: WizardStep.DIGITAL_LOCKER_CAPTURE,
    DocumentMethod.NATIONAL_ID_NUMBER: WizardStep.NATIONAL_ID_ENTRY,
    DocumentMethod.FACE_CAPTURE: WizardStep.FACE_CAPTURE,
}


def get_descriptor(step: int) -> StepDescriptor:
    """Look up the descriptor for a step index; raises ValueError for unknown steps."""
    return STEP_CATALOG[WizardStep(step)]
