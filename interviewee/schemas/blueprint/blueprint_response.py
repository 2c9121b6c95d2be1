"""
Description:
Schema for blueprint generation responses. Exactly one of blueprint or error is set;
raw and parseError are only present when the model answered with unparseable output.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.

"""
from typing import Optional
from pydantic import BaseModel, Field
from interviewee.schemas.blueprint.blueprint import Blueprint

class BlueprintResponse(BaseModel):
    blueprint: Optional[Blueprint] = Field(default=None, description="Generated blueprint")
    error: Optional[str] = Field(default=None, description="Displayable error message")
    raw: Optional[str] = Field(default=None, description="Raw model output when parsing failed")
    parseError: Optional[str] = Field(default=None, description="Parser error message")
