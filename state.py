from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentMethod(str, Enum):
    UNSELECTED = "unselected"
    DIGITAL_LOCKER = "digilocker"
    NATIONAL_ID_NUMBER = "aadhaar"
    FACE_CAPTURE = "face"


class Language(str, Enum):
    PRIMARY = "en"
    SECONDARY = "hi"


class VerificationRecord(BaseModel):
    """
    The single mutable aggregate built up during one wizard session.
    Owned by the WizardController; nothing else writes to it.
    """
    model_config = ConfigDict(validate_assignment=True)

    subject_name: Optional[str] = Field(default=None, description="Name of the user, once captured")
    document_method: DocumentMethod = Field(
        default=DocumentMethod.UNSELECTED,
        description="The KYC method chosen on the method selection screen"
    )
    # Only meaningful together with document_method: a file name, a 12 digit
    # Aadhaar number or the face capture marker.
    document_identifier: str = Field(default="", description="Captured artifact for the chosen method")
    face_artifact_present: bool = Field(default=False, description="Whether a face capture was confirmed")
    preferred_language: Language = Field(default=Language.PRIMARY, description="Language for voice prompts")
    completion_step: int = Field(default=0, ge=0, description="Index of the furthest step reached")

    def reset(self) -> None:
        """Return every field to its default value in place."""
        for name, field in type(self).model_fields.items():
            setattr(self, name, field.get_default(call_default_factory=True))
