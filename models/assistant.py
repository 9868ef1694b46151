from pydantic import BaseModel, ConfigDict, Field


class AssistantEntry(BaseModel):
    """A single question/answer pair of the help knowledge base."""
    model_config = ConfigDict(frozen=True)

    question: str = Field(..., min_length=1, description="Question text matched against user queries")
    answer: str = Field(..., min_length=1, description="Answer shown and spoken to the user")
