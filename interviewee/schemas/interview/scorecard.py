"""
Description:
This module defines the schemas for per-answer feedback: the STAR detection result,
the numeric scorecard and the compact coach summary.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.

"""
from typing import List
from pydantic import BaseModel, Field
from interviewee.schemas.blueprint.blueprint import Mode

class StarComponent(BaseModel):
    present: bool = Field(..., description="Whether the component was detected")
    evidence: str = Field(..., description="Fixed affirming or corrective message")

class StarResult(BaseModel):
    situation: StarComponent
    task: StarComponent
    action: StarComponent
    result: StarComponent

    def components(self) -> List[StarComponent]:
        """Components in S, T, A, R order."""
        return [self.situation, self.task, self.action, self.result]

    @property
    def star_count(self) -> int:
        return sum(1 for component in self.components() if component.present)

class Scores(BaseModel):
    overall: int = Field(..., ge=0, le=100, description="Sum of the four sub-scores")
    clarity: int = Field(..., ge=0, le=25)
    structure: int = Field(..., ge=0, le=25)
    impact: int = Field(..., ge=0, le=25)
    roleFit: int = Field(..., ge=0, le=25)

class Rewrite(BaseModel):
    improvedAnswer: str = Field(..., description="Structural scaffold for a better answer")
    bulletsToAdd: List[str] = Field(default_factory=list, description="Generic improvement suggestions")

class Scorecard(BaseModel):
    mode: Mode
    star: StarResult
    scores: Scores
    strengths: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)
    rewrite: Rewrite

class Coach(BaseModel):
    mode: Mode
    star: str = Field(..., description="Compact presence string, e.g. 'S:Y T:N A:Y R:Y'")
    missing: str = Field(..., description="Top gaps joined with ' | ', or 'None'")
    why: str
    intent: str
