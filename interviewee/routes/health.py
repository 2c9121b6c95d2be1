"""
Health check and model listing endpoints.

Description:
- GET /api/health: liveness check, never touches the model.
- GET /api/models: model identifiers the configured credential can use, handy for
  choosing LLM_MODEL / LLM_FALLBACK_MODELS.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- interviewee.core.route_limiters: For rate limiting functionality.
- interviewee.core.ai_client_manager: For the shared model gateway.
- loguru: For logging information about the endpoints.
"""
from fastapi import APIRouter, Depends, Request
from loguru import logger
from interviewee.core.ai_client_manager import get_model_gateway
from interviewee.core.route_limiters import limiter, HEALTH_LIMIT, READ_LIMIT
from interviewee.schemas.health_response import HealthResponse, ModelsResponse
from interviewee.services.model_gateway.model_gateway import ModelGateway

router = APIRouter(
    prefix="/api",
    tags=["health"],
    responses={404: {"description": "Not found"}}
)

@router.get("/health", response_model=HealthResponse)
@limiter.limit(HEALTH_LIMIT)
async def health(request: Request):
    """
    Request parameter is required for rate limiting.
    """
    logger.info("Health check endpoint called")
    return {"status": "ok"}

@router.get("/models", response_model=ModelsResponse)
@limiter.limit(READ_LIMIT)
async def list_models(request: Request, gateway: ModelGateway = Depends(get_model_gateway)):
    models = await gateway.list_models()
    logger.info(f"Listed {len(models)} models")
    return ModelsResponse(models=models)
