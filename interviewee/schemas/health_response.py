"""
Description: 
Schemas for the health and model listing endpoints.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import List
from pydantic import BaseModel

class HealthResponse(BaseModel):
    """
    Schema for health check endpoint responses.
    """
    status: str

class ModelsResponse(BaseModel):
    """Model identifiers visible to the configured credential."""
    models: List[str]
