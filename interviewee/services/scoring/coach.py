"""
Coach Module

Builds the compact coach summary that sits next to the scorecard in follow-up
responses, and bundles both into one evaluation of an answer.

Dependencies:
- interviewee.services: STAR detector and scoring engine.
- interviewee.schemas: Coach and Scorecard.
"""

from typing import NamedTuple
from interviewee.constants.feedback_text import COACH_INTENT, COACH_WHY
from interviewee.schemas.blueprint.blueprint import Mode
from interviewee.schemas.interview.scorecard import Coach, Scorecard
from interviewee.services.scoring.scoring_engine import score_answer
from interviewee.services.star_detection.star_detector import detect_star


class AnswerEvaluation(NamedTuple):
    scorecard: Scorecard
    coach: Coach


def _flag(present: bool) -> str:
    return "Y" if present else "N"


def build_coach(scorecard: Scorecard) -> Coach:
    star = scorecard.star
    compact = (
        f"S:{_flag(star.situation.present)} T:{_flag(star.task.present)} "
        f"A:{_flag(star.action.present)} R:{_flag(star.result.present)}"
    )
    return Coach(
        mode=scorecard.mode,
        star=compact,
        missing=" | ".join(scorecard.gaps[:2]) or "None",
        why=COACH_WHY,
        intent=COACH_INTENT,
    )


def evaluate_answer(answer: str, mode: Mode) -> AnswerEvaluation:
    """Run STAR detection and scoring on an answer. Never calls the model."""
    scorecard = score_answer(detect_star(answer), mode)
    return AnswerEvaluation(scorecard=scorecard, coach=build_coach(scorecard))
