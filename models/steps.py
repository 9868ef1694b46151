from enum import IntEnum
from typing import Callable, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from models.assistant import AssistantEntry
from state import DocumentMethod, VerificationRecord


class WizardStep(IntEnum):
    SPLASH = 0
    METHOD_SELECTION = 1
    DIGITAL_LOCKER_CAPTURE = 2
    NATIONAL_ID_ENTRY = 3
    FACE_CAPTURE = 4
    COMPLETION = 5
    CONNECTIVITY_NOTICE = 6
    CAPTURE_COMPLETE = 7
    ASSISTANT_QUERY = 8


class ScreenContext(BaseModel):
    """Read-only inputs a step's render hook may look at."""
    model_config = ConfigDict(frozen=True)

    record: VerificationRecord
    online: bool


class StepDescriptor(BaseModel):
    """
    Static description of one wizard screen: where it may lead, what it
    requires and which parts of the VerificationRecord it is allowed to touch.
    """
    model_config = ConfigDict(frozen=True)

    step: WizardStep
    title: str
    next_steps: FrozenSet[WizardStep] = Field(default_factory=frozenset)
    required_method: Optional[DocumentMethod] = Field(
        default=None,
        description="Document method this screen captures for, if it is a capture screen"
    )
    mutates: Tuple[str, ...] = Field(default=(), description="VerificationRecord fields this screen may change")
    actions: Tuple[str, ...] = Field(default=(), description="User actions offered on this screen")
    instructions: Optional[str] = Field(default=None, description="Text spoken by 'hear instructions'")
    render: Callable[[ScreenContext], str]

    @property
    def name(self) -> str:
        return self.step.name.lower()

    def allows(self, target: int) -> bool:
        return target in self.next_steps


class ScreenView(BaseModel):
    """The rendered state of the active screen."""
    step: int
    name: str
    title: str
    body: str
    actions: List[str]
    has_instructions: bool
    voice_input_available: bool = False
    connectivity_badge: str
    online: bool
    progress: int
    progress_max: int
    help_title: Optional[str] = None
    help_entries: List[AssistantEntry] = Field(default_factory=list)
    assistant_query: str = ""
    assistant_answer: str = ""
    notice: Optional[str] = None
