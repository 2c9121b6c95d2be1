"""
Description:
Schema for blueprint generation requests.

Fields default to empty strings so that missing inputs are reported by the service
as a 400 "Missing inputs" instead of a schema validation error.

Dependencies:
- pydantic: For data validation and settings management.

"""
from pydantic import AliasChoices, BaseModel, Field

class BlueprintRequest(BaseModel):
    company: str = Field(default="", description="Target company name")
    resumeText: str = Field(default="", description="Candidate resume as plain text")
    jobDescription: str = Field(
        default="",
        validation_alias=AliasChoices("jobDescription", "jdText"),
        description="Job description as plain text",
    )
