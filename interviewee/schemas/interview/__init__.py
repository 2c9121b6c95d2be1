from .interview_request import AnswerRequest, InterviewStepRequest, StartSessionRequest
from .interview_response import FollowUpResponse, OpeningQuestionResponse, SessionView, StartSessionResponse
from .scorecard import Coach, Rewrite, Scorecard, Scores, StarComponent, StarResult
from .session_state import SessionStatus
from .turn import Role, Turn, serialize_transcript

__all__ = [
    "AnswerRequest",
    "InterviewStepRequest",
    "StartSessionRequest",
    "FollowUpResponse",
    "OpeningQuestionResponse",
    "SessionView",
    "StartSessionResponse",
    "Coach",
    "Rewrite",
    "Scorecard",
    "Scores",
    "StarComponent",
    "StarResult",
    "SessionStatus",
    "Role",
    "Turn",
    "serialize_transcript",
]
