"""
Scoring Engine Module

Turns STAR detection signals into a Scorecard: four bounded sub-scores, their sum,
strengths and gaps, and a rewrite scaffold. The engine is a pure function of the
STAR result and the interview mode. It never calls the model, so it is the one
source of feedback that is always available.

Sub-scores, with n the number of STAR components present (0 to 4):
- clarity   = 10 + 3n
- structure = 8 + 4n
- impact    = 6 + (12 if Result present else 3)
- roleFit   = 10 + (6 if mode is behavioral else 4)
Each is clamped to [0, 25] and overall is their sum clamped to [0, 100].

Dependencies:
- interviewee.constants: Fixed strengths, gaps and rewrite templates.
- interviewee.schemas: Scorecard and its parts.
"""

from typing import List, Tuple
from interviewee.constants.feedback_text import (
    APPROACH_ANSWER_TEMPLATE,
    BEHAVIORAL_ANSWER_TEMPLATE,
    BULLETS_TO_ADD,
    STAR_STRENGTHS_AND_GAPS,
)
from interviewee.schemas.blueprint.blueprint import Mode
from interviewee.schemas.interview.scorecard import Rewrite, Scorecard, Scores, StarResult

SUB_SCORE_MAX = 25
OVERALL_MAX = 100


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def compute_scores(star: StarResult, mode: Mode) -> Scores:
    star_count = star.star_count
    clarity = clamp(10 + 3 * star_count, 0, SUB_SCORE_MAX)
    structure = clamp(8 + 4 * star_count, 0, SUB_SCORE_MAX)
    impact = clamp(6 + (12 if star.result.present else 3), 0, SUB_SCORE_MAX)
    role_fit = clamp(10 + (6 if Mode(mode) == Mode.BEHAVIORAL else 4), 0, SUB_SCORE_MAX)
    overall = clamp(clarity + structure + impact + role_fit, 0, OVERALL_MAX)
    return Scores(overall=overall, clarity=clarity, structure=structure, impact=impact, roleFit=role_fit)


def strengths_and_gaps(star: StarResult) -> Tuple[List[str], List[str]]:
    """One contribution per component, in S, T, A, R order."""
    strengths: List[str] = []
    gaps: List[str] = []
    for name in ("situation", "task", "action", "result"):
        strength, gap = STAR_STRENGTHS_AND_GAPS[name]
        if getattr(star, name).present:
            strengths.append(strength)
        else:
            gaps.append(gap)
    return strengths, gaps


def build_rewrite(mode: Mode) -> Rewrite:
    template = BEHAVIORAL_ANSWER_TEMPLATE if Mode(mode) == Mode.BEHAVIORAL else APPROACH_ANSWER_TEMPLATE
    return Rewrite(improvedAnswer=template, bulletsToAdd=list(BULLETS_TO_ADD))


def score_answer(star: StarResult, mode: Mode) -> Scorecard:
    """
    Build the full scorecard for one candidate answer.

    Args:
        star (StarResult): Output of the STAR detector for the answer.
        mode (Mode): Interview mode of the session.

    Returns:
        Scorecard: Scores, strengths, gaps and rewrite scaffold.
    """
    strengths, gaps = strengths_and_gaps(star)
    return Scorecard(
        mode=Mode(mode),
        star=star,
        scores=compute_scores(star, mode),
        strengths=strengths,
        gaps=gaps,
        rewrite=build_rewrite(mode),
    )
