"""
STAR Detector Module

Rule-based detection of the four STAR components (Situation, Task, Action, Result)
in a free-text interview answer. Each component is present when any of its cue
phrases appears anywhere in the answer, compared case-insensitively; a numeral or a
percent sign is enough for Result.

This is a heuristic, not a language model: it never looks at meaning, and the
evidence strings are fixed per component rather than quoted from the answer. The
same input always produces the same output.

Dependencies:
- interviewee.constants: STAR cue patterns and fixed evidence strings.
- interviewee.schemas: StarComponent and StarResult.
"""

from typing import Optional
from interviewee.constants.feedback_text import STAR_EVIDENCE
from interviewee.constants.regex_patterns import STAR_PATTERNS
from interviewee.schemas.interview.scorecard import StarComponent, StarResult


def _component(name: str, text: str) -> StarComponent:
    present = bool(STAR_PATTERNS[name].search(text))
    affirming, corrective = STAR_EVIDENCE[name]
    return StarComponent(present=present, evidence=affirming if present else corrective)


def detect_star(answer: Optional[str]) -> StarResult:
    """
    Detect which STAR components an answer contains.

    Args:
        answer (Optional[str]): The candidate's answer. None is treated as empty.

    Returns:
        StarResult: Presence flag and evidence message for each component.

    Example:
        >>> star = detect_star("I led the redesign; signups increased by 20%.")
        >>> star.action.present, star.result.present, star.situation.present
        (True, True, False)
    """
    text = answer or ""
    return StarResult(
        situation=_component("situation", text),
        task=_component("task", text),
        action=_component("action", text),
        result=_component("result", text),
    )
