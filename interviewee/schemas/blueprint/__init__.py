from .blueprint import ALLOWED_MODES, Blueprint, InterviewType, Mode, SampleQuestion
from .blueprint_request import BlueprintRequest
from .blueprint_response import BlueprintResponse

__all__ = [
    "ALLOWED_MODES",
    "Blueprint",
    "InterviewType",
    "Mode",
    "SampleQuestion",
    "BlueprintRequest",
    "BlueprintResponse",
]
