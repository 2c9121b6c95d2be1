"""
Description:
Schemas for interview responses.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.

"""
from typing import List, Optional
from pydantic import BaseModel, Field
from interviewee.schemas.interview.scorecard import Coach, Scorecard
from interviewee.schemas.interview.session_state import SessionStatus
from interviewee.schemas.interview.turn import Turn

class OpeningQuestionResponse(BaseModel):
    interviewer: str = Field(..., description="Opening interviewer question")

class FollowUpResponse(BaseModel):
    interviewer: str = Field(..., description="Next interviewer question")
    coach: Coach
    scorecard: Scorecard

class StartSessionResponse(BaseModel):
    sessionId: str
    interviewer: str

class SessionView(BaseModel):
    sessionId: str
    status: SessionStatus
    transcript: List[Turn] = Field(default_factory=list)
    scorecard: Optional[Scorecard] = None
