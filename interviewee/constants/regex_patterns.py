"""
Description:
This module contains precompiled regex patterns for STAR-structure detection in
candidate answers and for reading retry hints out of model provider error messages.

All STAR patterns are case-insensitive and deliberately unanchored: a cue phrase
anywhere in the answer counts.

Dependencies:
- re: Python's built-in regular expression module for pattern matching.

"""

import re

# Compile regex patterns once for better performance
STAR_PATTERNS = {
    'situation': re.compile(r"(when|at the time|in my role|we had|the context|situation)", re.IGNORECASE),
    'task': re.compile(r"(my task|goal|responsible for|i needed to|objective)", re.IGNORECASE),
    'action': re.compile(
        r"(i did|i led|i built|i analyzed|i created|i implemented|i coordinated|i communicated)",
        re.IGNORECASE,
    ),
    'result': re.compile(r"(result|impact|increased|reduced|improved|grew|decreased|%|percent|\d+)", re.IGNORECASE),
}

# "Please retry in 12.5s", "retry in 3s"
RETRY_IN_SECONDS = re.compile(r"retry in\s+([\d.]+)\s*s\b", re.IGNORECASE)
# "Please try again in 20s", "try again in 350ms"
TRY_AGAIN_IN = re.compile(r"try again in\s+([\d.]+)\s*(ms|s)\b", re.IGNORECASE)
