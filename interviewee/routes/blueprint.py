"""
Blueprint API Route

Description:
POST /api/blueprint turns a resume, a job description and a company into an
interview blueprint.

Responses:
- 200 {"blueprint": {...}} on success.
- 200 {"error", "raw", "parseError"} when the model answered but its output is not
  a valid blueprint, so the caller can still show what came back.
- 400 {"error": "Missing inputs"} when any field is blank.
- 500/503 {"error"} for configuration and model failures (see errors.handlers).

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- interviewee.services.blueprint.blueprint_service: For blueprint generation.
- loguru: For logging information about the request and any errors that occur.
"""
from fastapi import APIRouter, Depends, Request
from loguru import logger
from interviewee.core.ai_client_manager import get_model_gateway
from interviewee.core.route_limiters import limiter, BLUEPRINT_LIMIT
from interviewee.errors.exceptions import InternalServerError
from interviewee.errors.interview_errors import InterviewError
from interviewee.schemas.blueprint import BlueprintRequest, BlueprintResponse
from interviewee.services.blueprint.blueprint_service import generate_blueprint
from interviewee.services.model_gateway.model_gateway import ModelGateway

router = APIRouter(
    prefix="/api",
    tags=["blueprint"],
    responses={404: {"description": "Not found"}}
)


@router.post("/blueprint", response_model=BlueprintResponse, response_model_exclude_none=True)
@limiter.limit(BLUEPRINT_LIMIT)
async def create_blueprint(
    request: Request,
    payload: BlueprintRequest,
    gateway: ModelGateway = Depends(get_model_gateway),
):
    """
    Generate an interview blueprint for the given resume, job description and company
    """
    try:
        result = await generate_blueprint(
            gateway,
            resume_text=payload.resumeText,
            job_description=payload.jobDescription,
            company=payload.company,
        )
    except InterviewError:
        raise
    except Exception as e:
        logger.error(f"Error generating blueprint: {e}")
        raise InternalServerError("Failed to generate blueprint.") from e

    if not result.ok:
        return BlueprintResponse(
            error="Model output was not a valid blueprint",
            raw=result.raw,
            parseError=result.parse_error,
        )
    return BlueprintResponse(blueprint=result.blueprint)
