"""
Description:
Interview blueprint schema. The JSON keys are exactly the ones the blueprint prompt
asks the model to produce, so a blueprint dumped with model_dump(mode="json")
parses back into an equal value.

Dependencies:
- pydantic: For data validation and serialization.
- enum: For the interview type and mode enumerations.

"""
from enum import Enum
from typing import List, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field


class Mode(str, Enum):
    """Interview category selected for a session."""
    BEHAVIORAL = "behavioral"
    TECHNICAL = "technical"
    CASE = "case"


class InterviewType(str, Enum):
    """Closed set of interview types a blueprint may predict. There is no "mixed"."""
    BEHAVIORAL_TECHNICAL = "behavioral_technical"
    BEHAVIORAL_CASE = "behavioral_case"


ALLOWED_MODES = {
    InterviewType.BEHAVIORAL_TECHNICAL: (Mode.BEHAVIORAL, Mode.TECHNICAL),
    InterviewType.BEHAVIORAL_CASE: (Mode.BEHAVIORAL, Mode.CASE),
}


class SampleQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["behavioral", "technical", "case"] = Field(..., description="Question category")
    question: str = Field(..., min_length=1, description="Question text")


class Blueprint(BaseModel):
    """Structured profile of what the interview is expected to cover. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    role_focus: Tuple[str, ...] = Field(default_factory=tuple, description="Top skills or topics, most important first")
    likely_interview_type: InterviewType = Field(..., description="Predicted interview type")
    risk_gaps: Tuple[str, ...] = Field(default_factory=tuple, description="Resume vs job description mismatches")
    company_notes: Tuple[str, ...] = Field(default_factory=tuple, description="Company-specific interview context")
    sample_questions: Tuple[SampleQuestion, ...] = Field(default_factory=tuple, description="Example questions in order")

    @property
    def allowed_modes(self) -> Tuple[Mode, ...]:
        return ALLOWED_MODES[self.likely_interview_type]

    @property
    def default_mode(self) -> Mode:
        return Mode.BEHAVIORAL

    def allows(self, mode: Mode) -> bool:
        return Mode(mode) in self.allowed_modes

    def questions_for(self, mode: Mode, limit: int = 2) -> List[str]:
        """Sample question texts matching the given mode, in blueprint order."""
        mode = Mode(mode)
        return [q.question for q in self.sample_questions if q.type == mode.value][:limit]
