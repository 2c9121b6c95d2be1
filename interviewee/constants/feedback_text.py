"""
Description:
Fixed feedback strings used by the STAR detector and the scoring engine. None of
these depend on the content of the candidate's answer.

"""

# component -> (evidence when present, evidence when absent)
STAR_EVIDENCE = {
    'situation': ("Mentions context.", "Add 1 line of context."),
    'task': ("States goal/ownership.", "Add your goal + responsibility."),
    'action': ("Shows what you did.", "Add 2–3 concrete actions."),
    'result': ("Shows outcomes/metrics.", "Add outcome + metric."),
}

# component -> (strength when present, gap when absent)
STAR_STRENGTHS_AND_GAPS = {
    'situation': ("You set context (Situation).", "Add 1 sentence of context (Situation)."),
    'task': ("You stated your goal/ownership (Task).", "State your goal + what success looked like (Task)."),
    'action': ("You included concrete actions (Action).", "Add 2–3 specific actions you took (Action)."),
    'result': ("You included outcome/impact (Result).", "Add a measurable result (metric, % change, time saved)."),
}

BEHAVIORAL_ANSWER_TEMPLATE = (
    "Situation: [1 line context]\n"
    "Task: [your goal + ownership]\n"
    "Action: [2–3 steps you took]\n"
    "Result: [metric + impact + what you learned]"
)

APPROACH_ANSWER_TEMPLATE = (
    "Answer: [clear approach]\n"
    "Trade-offs: [2–3]\n"
    "Decision: [what you’d choose + why]\n"
    "Validation: [how you’d test/measure]"
)

BULLETS_TO_ADD = (
    "Add one hard metric (%, $, time saved).",
    "Call out a trade-off and why you chose your approach.",
    "Mention stakeholder alignment or validation step.",
)

COACH_WHY = "Strong answers are structured and measurable. STAR makes it easy to evaluate quickly."
COACH_INTENT = "Follow-up targets depth and validates your claim."

DEFAULT_OPENING_QUESTION = "Tell me about yourself and why this role."
DEFAULT_FOLLOW_UP_QUESTION = "What was the biggest challenge, and how did you handle it?"
