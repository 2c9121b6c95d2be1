"""
Interview API Routes

Description:
Two ways to drive a mock interview.

Step endpoint, the client keeps the transcript:
- POST /api/interview {step: "start", company, blueprint, mode} -> {interviewer}
- POST /api/interview {step: "followup", company, blueprint, mode, transcript, candidateAnswer}
  -> {interviewer, coach, scorecard}

Session endpoints, the server keeps the transcript in memory:
- POST   /api/interview/sessions                 -> {sessionId, interviewer}
- POST   /api/interview/sessions/{id}/answers    -> {interviewer, coach, scorecard}
- GET    /api/interview/sessions/{id}            -> session view
- POST   /api/interview/sessions/{id}/reset      -> session view
- DELETE /api/interview/sessions/{id}

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- interviewee.services.interview: For the interview orchestrator and session store.
- loguru: For logging information about the request and any errors that occur.
"""
from typing import Union
from fastapi import APIRouter, Depends, Request, Response
from loguru import logger
from interviewee.core.ai_client_manager import get_model_gateway
from interviewee.core.route_limiters import limiter, INTERVIEW_LIMIT, READ_LIMIT
from interviewee.errors.exceptions import BadRequest
from interviewee.schemas.interview import (
    AnswerRequest,
    FollowUpResponse,
    InterviewStepRequest,
    OpeningQuestionResponse,
    SessionView,
    StartSessionRequest,
    StartSessionResponse,
)
from interviewee.services.interview.interview_orchestrator import (
    InterviewSession,
    ask_follow_up,
    ask_opening_question,
    build_context,
)
from interviewee.services.interview.session_store import SessionStore, session_store
from interviewee.services.model_gateway.model_gateway import ModelGateway

router = APIRouter(
    prefix="/api",
    tags=["interview"],
    responses={404: {"description": "Not found"}}
)


def get_session_store() -> SessionStore:
    return session_store


def _session_view(session: InterviewSession) -> SessionView:
    return SessionView(
        sessionId=session.session_id,
        status=session.status,
        transcript=session.transcript,
        scorecard=session.latest_scorecard,
    )


@router.post("/interview", response_model=Union[FollowUpResponse, OpeningQuestionResponse])
@limiter.limit(INTERVIEW_LIMIT)
async def interview_step(
    request: Request,
    payload: InterviewStepRequest,
    gateway: ModelGateway = Depends(get_model_gateway),
):
    """
    Run one interview step. The caller sends the whole context on every request.
    """
    if not payload.step or not payload.company.strip() or payload.blueprint is None:
        raise BadRequest("Missing required fields: step, company, blueprint")

    context = build_context(payload.company, payload.blueprint, payload.mode)

    if payload.step == "start":
        question = await ask_opening_question(gateway, context)
        logger.info(f"Opening question issued for {context.company} ({context.mode.value})")
        return OpeningQuestionResponse(interviewer=question)

    result = await ask_follow_up(gateway, context, payload.transcript, payload.candidateAnswer)
    return FollowUpResponse(interviewer=result.interviewer, coach=result.coach, scorecard=result.scorecard)


@router.post("/interview/sessions", response_model=StartSessionResponse, status_code=201)
@limiter.limit(INTERVIEW_LIMIT)
async def start_session(
    request: Request,
    payload: StartSessionRequest,
    gateway: ModelGateway = Depends(get_model_gateway),
    store: SessionStore = Depends(get_session_store),
):
    """
    Start a server-side interview session and return its opening question.
    """
    session = InterviewSession(gateway)
    opening = await session.start(payload.company, payload.blueprint, payload.mode)
    store.add(session)
    return StartSessionResponse(sessionId=session.session_id, interviewer=opening.content)


@router.post("/interview/sessions/{session_id}/answers", response_model=FollowUpResponse)
@limiter.limit(INTERVIEW_LIMIT)
async def submit_answer(
    request: Request,
    session_id: str,
    payload: AnswerRequest,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    result = await session.submit_answer(payload.candidateAnswer)
    return FollowUpResponse(interviewer=result.interviewer, coach=result.coach, scorecard=result.scorecard)


@router.get("/interview/sessions/{session_id}", response_model=SessionView)
@limiter.limit(READ_LIMIT)
async def get_session(
    request: Request,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
):
    return _session_view(store.get(session_id))


@router.post("/interview/sessions/{session_id}/reset", response_model=SessionView)
@limiter.limit(INTERVIEW_LIMIT)
async def reset_session(
    request: Request,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    session.reset()
    return _session_view(session)


@router.delete("/interview/sessions/{session_id}", status_code=204, response_class=Response)
@limiter.limit(INTERVIEW_LIMIT)
async def delete_session(
    request: Request,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
):
    store.delete(session_id)
    return Response(status_code=204)
