"""
Description:
This module sets up a rate limiter for the application using SlowAPI.
Clients are identified by IP address. Routes that call the model get tighter
limits than the rest, since every call costs model quota.

Dependencies:
- slowapi: For rate limiting functionality.
- slowapi.util: For utility functions like get_remote_address to retrieve the client's IP address.
- loguru: For logging information about the rate limiter initialization.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from loguru import logger

HEALTH_LIMIT = "10/minute"
BLUEPRINT_LIMIT = "5/minute"
INTERVIEW_LIMIT = "30/minute"
READ_LIMIT = "60/minute"

limiter = Limiter(key_func=get_remote_address, default_limits=["60/minute"])
logger.info("Rate limiter initialized")
