"""
Description:
Schemas for interview requests: the step-based endpoint and the session endpoints.

Dependencies:
- pydantic: For data validation and settings management.

"""
from typing import Literal, Optional
from pydantic import BaseModel, Field
from interviewee.schemas.blueprint.blueprint import Blueprint, Mode

class InterviewStepRequest(BaseModel):
    step: Optional[Literal["start", "followup"]] = Field(default=None, description="Which step to run")
    company: str = Field(default="", description="Target company name")
    blueprint: Optional[Blueprint] = Field(default=None, description="Blueprint generated for this candidate")
    mode: Optional[Mode] = Field(default=None, description="Interview mode, null or missing means behavioral")
    transcript: str = Field(default="", description="Serialized transcript, followup only")
    candidateAnswer: str = Field(default="", description="Latest candidate answer, followup only")

class StartSessionRequest(BaseModel):
    company: str = Field(default="", description="Target company name")
    blueprint: Optional[Blueprint] = Field(default=None, description="Blueprint generated for this candidate")
    mode: Optional[Mode] = Field(default=None, description="Interview mode, defaults to the blueprint default")

class AnswerRequest(BaseModel):
    candidateAnswer: str = Field(default="", description="Candidate answer text")
