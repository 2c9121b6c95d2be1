"""
Interview Orchestrator Module

This module runs the turn-based mock interview: an opening question, then for every
candidate answer a follow-up question from the model plus deterministic STAR
scoring of the answer.

It offers two ways in:

1. Step functions (ask_opening_question, ask_follow_up) for callers that keep the
   transcript themselves and send it back as text on every request.
2. InterviewSession, an explicit state machine that owns its transcript:

       NOT_STARTED --start()--> AWAITING_ANSWER --submit_answer()--> AWAITING_ANSWER
            ^                                                            |
            +---------------------------reset()--------------------------+

   There is no ended state. A session is over when the caller stops answering.

Scoring never depends on the model. If the follow-up question cannot be generated,
the answer is still scored and a default follow-up question is used.

Dependencies:
- loguru: For logging operations.
- interviewee.core.secure_prompt_manager: For the interviewer prompts.
- interviewee.services.model_gateway: For model access.
- interviewee.services.scoring.coach: For STAR detection and scoring.
"""

import uuid
from typing import List, NamedTuple, Optional
from loguru import logger
from interviewee.constants.feedback_text import DEFAULT_FOLLOW_UP_QUESTION, DEFAULT_OPENING_QUESTION
from interviewee.core.secure_prompt_manager import secure_prompt_manager, strip_control_characters
from interviewee.errors.interview_errors import (
    ConfigurationError,
    InvalidInputError,
    InvalidStateError,
    ModelGatewayError,
)
from interviewee.schemas.blueprint.blueprint import Blueprint, Mode
from interviewee.schemas.interview.scorecard import Coach, Scorecard
from interviewee.schemas.interview.session_state import SessionStatus
from interviewee.schemas.interview.turn import Role, Turn, serialize_transcript
from interviewee.services.model_gateway.model_gateway import ModelGateway
from interviewee.services.scoring.coach import evaluate_answer


class InterviewContext(NamedTuple):
    company: str
    blueprint: Blueprint
    mode: Mode


class FollowUpResult(NamedTuple):
    interviewer: str
    coach: Coach
    scorecard: Scorecard
    used_fallback: bool


def build_context(company: str, blueprint: Optional[Blueprint], mode: Optional[Mode] = None) -> InterviewContext:
    """
    Validate the inputs every interviewer prompt needs.

    Args:
        company (str): Target company.
        blueprint (Optional[Blueprint]): Blueprint for the session.
        mode (Optional[Mode]): Requested mode. Defaults to the blueprint's default mode.

    Raises:
        InvalidInputError: If company or blueprint is missing, or the blueprint's
            interview type does not allow the mode.
    """
    if not company or not company.strip():
        raise InvalidInputError("Missing required field: company")
    if blueprint is None:
        raise InvalidInputError("Missing required field: blueprint")
    mode = Mode(mode) if mode is not None else blueprint.default_mode
    if not blueprint.allows(mode):
        allowed = ", ".join(m.value for m in blueprint.allowed_modes)
        raise InvalidInputError(
            f"Mode '{mode.value}' is not available for a {blueprint.likely_interview_type.value} "
            f"interview (allowed: {allowed})"
        )
    return InterviewContext(company=company.strip(), blueprint=blueprint, mode=mode)


async def ask_opening_question(gateway: ModelGateway, context: InterviewContext) -> str:
    """
    Ask the model for exactly one opening question.

    Model failures propagate; there is nothing to score yet, so no fallback.
    """
    prompt = secure_prompt_manager.get_opening_question_prompt(context.company, context.blueprint, context.mode)
    generation = await gateway.generate_with_fallback(prompt)
    question = (generation.text or "").strip()
    return question or DEFAULT_OPENING_QUESTION


async def ask_follow_up(
    gateway: ModelGateway,
    context: InterviewContext,
    transcript: str,
    candidate_answer: str,
) -> FollowUpResult:
    """
    Score the latest answer and ask the model for one follow-up question.

    Args:
        gateway (ModelGateway): Model access.
        context (InterviewContext): Company, blueprint and mode.
        transcript (str): Transcript so far as `ROLE: content` lines, latest answer included.
        candidate_answer (str): The latest candidate answer.

    Returns:
        FollowUpResult: Follow-up question, coach and scorecard. used_fallback is True
            when the model could not produce the question.

    Raises:
        InvalidInputError: If transcript or answer has no text once whitespace and
            control characters are removed.
    """
    if not strip_control_characters(transcript or "") or not strip_control_characters(candidate_answer or ""):
        raise InvalidInputError("Missing required fields for followup: transcript, candidateAnswer")

    # computed before the model call so feedback never waits on, or depends on, the model
    evaluation = evaluate_answer(candidate_answer, context.mode)

    used_fallback = False
    question = ""
    try:
        prompt = secure_prompt_manager.get_follow_up_prompt(
            context.company, context.mode, transcript, candidate_answer
        )
        generation = await gateway.generate_with_fallback(prompt)
        question = (generation.text or "").strip()
    except ModelGatewayError as e:
        logger.warning(f"Follow-up question generation failed ({e.kind.value}), using default question: {e.message}")
        used_fallback = True
    except ConfigurationError as e:
        logger.error(f"Follow-up question unavailable, using default question: {e}")
        used_fallback = True
    if not question:
        question = DEFAULT_FOLLOW_UP_QUESTION

    return FollowUpResult(
        interviewer=question,
        coach=evaluation.coach,
        scorecard=evaluation.scorecard,
        used_fallback=used_fallback,
    )


class InterviewSession:
    """
    One mock interview with an explicit state and an append-only transcript.

    A session handles one operation at a time; concurrent calls on the same
    session are not supported.

    Attributes:
        session_id (str): Identifier used by the session store.
        status (SessionStatus): Current state.
        transcript (List[Turn]): Turns in chronological order.
        latest_scorecard (Optional[Scorecard]): Scorecard of the most recent answer only.

    Example:
        >>> session = InterviewSession(gateway)
        >>> await session.start("Acme", blueprint, Mode.BEHAVIORAL)
        >>> result = await session.submit_answer("I led the migration; latency dropped 40%.")
        >>> result.scorecard.scores.overall
    """

    def __init__(self, gateway: ModelGateway, session_id: Optional[str] = None):
        self.gateway = gateway
        self.session_id = session_id or str(uuid.uuid4())
        self.status = SessionStatus.NOT_STARTED
        self.context: Optional[InterviewContext] = None
        self.latest_scorecard: Optional[Scorecard] = None
        self._transcript: List[Turn] = []

    @property
    def transcript(self) -> List[Turn]:
        return list(self._transcript)

    def transcript_text(self) -> str:
        return serialize_transcript(self._transcript)

    def reset(self) -> None:
        """Discard the transcript and scorecard and return to NOT_STARTED."""
        self._transcript = []
        self.latest_scorecard = None
        self.context = None
        self.status = SessionStatus.NOT_STARTED
        logger.info(f"Interview session {self.session_id} reset")

    async def start(self, company: str, blueprint: Optional[Blueprint], mode: Optional[Mode] = None) -> Turn:
        """
        Start the interview with one opening question.

        Raises:
            InvalidStateError: If the session already started and was not reset.
            InvalidInputError: If company, blueprint or mode is invalid.
            ModelGatewayError: If the opening question could not be generated.
        """
        if self.status is not SessionStatus.NOT_STARTED:
            raise InvalidStateError("Interview already started; reset the session to start over")

        context = build_context(company, blueprint, mode)
        self._transcript = []
        self.latest_scorecard = None

        question = await ask_opening_question(self.gateway, context)

        opening = Turn(role=Role.INTERVIEWER, content=question)
        self.context = context
        self._transcript.append(opening)
        self.status = SessionStatus.AWAITING_ANSWER
        logger.info(f"Interview session {self.session_id} started: company={context.company}, mode={context.mode.value}")
        return opening

    async def submit_answer(self, answer: str) -> FollowUpResult:
        """
        Record a candidate answer, score it and ask the next question.

        The candidate turn is appended before the model is called, so it is part of
        the follow-up prompt. The interviewer turn (model question or default
        question) is appended afterwards. The session stays in AWAITING_ANSWER.

        Raises:
            InvalidStateError: If the session has not been started, or the answer has
                no text left once whitespace and control characters are removed.
                Nothing is appended in either case.
        """
        if self.status is not SessionStatus.AWAITING_ANSWER or not self._transcript:
            raise InvalidStateError("Interview not started; call start first")
        answer = strip_control_characters(answer or "")
        if not answer:
            raise InvalidStateError("Answer cannot be empty")

        self._transcript.append(Turn(role=Role.CANDIDATE, content=answer))

        result = await ask_follow_up(self.gateway, self.context, self.transcript_text(), answer)

        self._transcript.append(Turn(role=Role.INTERVIEWER, content=result.interviewer))
        self.latest_scorecard = result.scorecard
        logger.info(
            f"Interview session {self.session_id} answer scored: overall={result.scorecard.scores.overall}, "
            f"star={result.coach.star}, fallback_question={result.used_fallback}"
        )
        return result
