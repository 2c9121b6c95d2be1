"""
Session State Schemas

Explicit state of one interview session. There is no "ended" state: a session
stops when the caller stops sending answers or resets it.

Dependencies:
- enum: For the status enumeration.
"""

from enum import Enum


class SessionStatus(str, Enum):
    """Status of an interview session."""
    NOT_STARTED = "not_started"
    AWAITING_ANSWER = "awaiting_answer"
