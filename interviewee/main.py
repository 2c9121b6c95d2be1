from dotenv import load_dotenv
from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager
from slowapi import _rate_limit_exceeded_handler
# Rate Limiter
from interviewee.core.route_limiters import limiter
# Routers
from interviewee.routes.health import router as health_router
from interviewee.routes.blueprint import router as blueprint_router
from interviewee.routes.interview import router as interview_router
# CORS Middleware
from interviewee.core.cors_middleware import add_cors_middleware
# Logger
from loguru import logger
# Error Handling
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException

from interviewee.errors.handlers import (
    configuration_error_handler,
    generic_exception_handler,
    http_exception_handler,
    invalid_input_handler,
    invalid_state_handler,
    model_gateway_error_handler,
    validation_exception_handler,
)
from interviewee.errors.interview_errors import (
    ConfigurationError,
    InvalidInputError,
    InvalidStateError,
    ModelGatewayError,
)

# Load environment variables
load_dotenv()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    # The model client is created on first use, so a missing key does not stop startup
    logger.info("Application startup completed successfully")

    yield

    logger.info("Application shutdown")

# Initialize FastAPI app
app = FastAPI(
    title="Interviewee API",
    description="Interview blueprints, mock interviews and STAR answer scoring",
    version="0.1.0",
    lifespan=lifespan
)
# Add CORS middleware
add_cors_middleware(app)

# Centralized error handlers
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(InvalidInputError, invalid_input_handler)
app.add_exception_handler(InvalidStateError, invalid_state_handler)
app.add_exception_handler(ConfigurationError, configuration_error_handler)
app.add_exception_handler(ModelGatewayError, model_gateway_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Add rate limiter to the app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Include routers
app.include_router(health_router)
app.include_router(blueprint_router)
app.include_router(interview_router)
