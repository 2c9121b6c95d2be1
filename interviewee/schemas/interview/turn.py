"""
Description:
Transcript turn schema and the plain-text rendering used as follow-up prompt context.

Dependencies:
- pydantic: For data validation and settings management.

"""
from enum import Enum
from typing import Iterable
from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    INTERVIEWER = "interviewer"
    CANDIDATE = "candidate"


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Who spoke")
    content: str = Field(..., description="What was said")

    def render(self) -> str:
        return f"{self.role.value.upper()}: {self.content}"


def serialize_transcript(turns: Iterable[Turn]) -> str:
    """Render turns as newline-joined `ROLE: content` lines, in order."""
    return "\n".join(turn.render() for turn in turns)
