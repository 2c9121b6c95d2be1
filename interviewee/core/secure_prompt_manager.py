"""
Secure Prompt Manager Module

This module keeps every model prompt in one place, isolated from user data. Each
prompt is a template with explicit placeholders; resume text, job descriptions,
company names, transcripts and answers are sanitized and length-limited before
they are substituted in.

The module contains:
- PromptTemplate: A dataclass for prompt templates with placeholders
- SecurePromptManager: Renders the blueprint, opening question and follow-up prompts
- sanitize_text: Utility function for text sanitization
- strip_control_characters: The control-character rule shared with answer validation

Dependencies:
- dataclasses: For template data structures
- typing: For type hints
- re: For regex-based sanitization
- html: For HTML entity encoding
"""

from typing import Dict, Iterable
from dataclasses import dataclass, field
import re
import html
import logging
from interviewee.schemas.blueprint.blueprint import Blueprint, Mode

logger = logging.getLogger(__name__)

NOT_PROVIDED = "None provided"

CONTROL_CHARACTERS = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

def strip_control_characters(text: str) -> str:
    """Remove null bytes and other control characters (newlines and tabs are kept) and trim."""
    return CONTROL_CHARACTERS.sub('', text).strip()

def sanitize_text(text: str, max_length: int = 1000, escape_html: bool = True, keep_tail: bool = False) -> str:
    """
    Sanitize text before it is placed into a prompt.

    Steps:
    1. Optional HTML entity encoding
    2. Removes null bytes and other control characters (newlines and tabs are kept)
    3. Strips leading/trailing whitespace
    4. Length limiting, keeping either the start or the end of the text
    5. Drops invalid unicode

    Args:
        text (str): The text to sanitize
        max_length (int): Maximum allowed length (default: 1000)
        escape_html (bool): Whether to HTML escape the text (default: True)
        keep_tail (bool): Keep the last max_length characters instead of the first.
            The cut is moved forward to the next line break when there is one, so
            line-oriented text such as a transcript loses whole lines only.

    Returns:
        str: The sanitized text

    Raises:
        ValueError: If text is None or empty after sanitization
    """
    if text is None:
        raise ValueError("Text cannot be None")

    text = str(text)

    if escape_html:
        text = html.escape(text)

    text = strip_control_characters(text)

    if len(text) > max_length:
        if keep_tail:
            text = text[-max_length:]
            line_break = text.find("\n")
            if line_break != -1:
                text = text[line_break + 1:]
        else:
            text = text[:max_length]
        logger.warning(f"Text truncated to {max_length} characters")

    text = text.encode('utf-8', errors='ignore').decode('utf-8')

    if not text:
        raise ValueError("Text cannot be empty after sanitization")

    return text

def bullet_list(items: Iterable[str]) -> str:
    """Join items as '- item' lines, or NOT_PROVIDED when there are none."""
    lines = [f"- {item.strip()}" for item in items if item and item.strip()]
    return "\n".join(lines) if lines else NOT_PROVIDED

@dataclass
class PromptTemplate:
    """Prompt template with placeholders for safe data injection."""
    template: str
    placeholders: Dict[str, str]
    sanitization_config: Dict[str, Dict] = field(default_factory=dict)  # Per-placeholder sanitization config
    optional: frozenset = frozenset()  # Placeholders rendered as NOT_PROVIDED when empty

    def render(self, **kwargs) -> str:
        """
        Render the template with sanitized data.

        Args:
            **kwargs: Data to inject into placeholders

        Returns:
            str: Rendered prompt

        Raises:
            ValueError: If required placeholders are missing or empty
        """
        missing_placeholders = set(self.placeholders.keys()) - set(kwargs.keys())
        if missing_placeholders:
            raise ValueError(f"Missing required placeholders: {missing_placeholders}")

        sanitized_data = {}
        for key, value in kwargs.items():
            if key not in self.placeholders:
                logger.warning(f"Unknown placeholder key: {key}")
                continue
            if key in self.optional and (value is None or not str(value).strip()):
                sanitized_data[key] = NOT_PROVIDED
                continue
            config = self.sanitization_config.get(key, {})
            sanitized_data[key] = sanitize_text(
                str(value),
                max_length=config.get('max_length', 1000),
                escape_html=config.get('escape_html', True),
                keep_tail=config.get('keep_tail', False),
            )

        try:
            return self.template.format(**sanitized_data)
        except KeyError as e:
            raise ValueError(f"Template rendering error: {e}") from e

def _plain(max_length: int, keep_tail: bool = False) -> Dict:
    # prompt text goes to the model, not a browser
    return {'max_length': max_length, 'escape_html': False, 'keep_tail': keep_tail}

class SecurePromptManager:
    """
    Renders the three prompts the interview flow sends to the model:

    1. blueprint: resume + job description + company -> JSON blueprint
    2. opening_question: blueprint + mode -> exactly one first question
    3. follow_up: transcript + latest answer -> exactly one follow-up question
    """

    def __init__(self):
        self._templates = self._initialize_templates()

    def _initialize_templates(self) -> Dict[str, PromptTemplate]:
        return {
            "blueprint": PromptTemplate(
                template="""IMPORTANT: Output must be valid JSON only. No markdown. No commentary.

You are Interviewee, an orchestrated interview simulation system.

TASK:
Analyze the resume, job description, and company.
Create an INTERVIEW BLUEPRINT for a mock interview.

Resume:
{resume_text}

Job Description:
{job_description}

Company:
{company}

CLASSIFICATION RULE for "likely_interview_type":
- Technical, engineering or data-heavy role -> "behavioral_technical"
- Strategy, product or business-heavy role -> "behavioral_case"
- Never answer "mixed". Pick the closer of the two.

Return JSON ONLY in this exact structure:
{{
  "role_focus": ["skill 1", "skill 2", "skill 3"],
  "likely_interview_type": "behavioral_technical" | "behavioral_case",
  "risk_gaps": ["gap 1", "gap 2"],
  "company_notes": ["note 1", "note 2"],
  "sample_questions": [
    {{ "type": "behavioral", "question": "..." }},
    {{ "type": "technical" | "case", "question": "..." }}
  ]
}}""",
                placeholders={
                    "resume_text": "Candidate resume",
                    "job_description": "Job description",
                    "company": "Target company",
                },
                sanitization_config={
                    "resume_text": _plain(12000),
                    "job_description": _plain(8000),
                    "company": _plain(200),
                },
            ),
            "opening_question": PromptTemplate(
                template="""You are the interviewer for {company}.
Mode: {mode}.

Blueprint focus:
- role_focus: {role_focus}
- risk_gaps: {risk_gaps}

Company notes:
{company_notes}

Task:
Ask ONE strong first interview question for this mode.
- Keep it concise (1-2 sentences) and realistic, the way a real interviewer would say it.
- No preamble. No explanation.
- If behavioral: prefer a conflict/stakeholder/impact STAR-style prompt.
- If technical: pick a practical question aligned to the role focus.
- If case: pick a product/strategy case aligned to the role focus.

If helpful, you may adapt one of these sample questions:
{seed_questions}

Return ONLY the question text.""",
                placeholders={
                    "company": "Target company",
                    "mode": "Interview mode",
                    "role_focus": "Comma separated role focus",
                    "risk_gaps": "Comma separated risk gaps",
                    "company_notes": "Bulleted company notes",
                    "seed_questions": "Bulleted sample questions for the mode",
                },
                sanitization_config={
                    "company": _plain(200),
                    "role_focus": _plain(1000),
                    "risk_gaps": _plain(1000),
                    "company_notes": _plain(2000),
                    "seed_questions": _plain(2000),
                },
                optional=frozenset({"role_focus", "risk_gaps", "company_notes", "seed_questions"}),
            ),
            "follow_up": PromptTemplate(
                template="""You are the interviewer for {company}.
Mode: {mode}.

Given the transcript below, ask ONE follow-up question that tests depth and closes gaps.
Keep it 1 sentence. No explanation.

Transcript:
{transcript}

Latest candidate answer:
{candidate_answer}

Return ONLY the follow-up question text.""",
                placeholders={
                    "company": "Target company",
                    "mode": "Interview mode",
                    "transcript": "Serialized transcript, ROLE: content per line",
                    "candidate_answer": "Latest candidate answer",
                },
                sanitization_config={
                    "company": _plain(200),
                    # oldest turns are dropped first
                    "transcript": _plain(16000, keep_tail=True),
                    "candidate_answer": _plain(4000),
                },
            ),
        }

    def get_blueprint_prompt(self, resume_text: str, job_description: str, company: str) -> str:
        return self._templates["blueprint"].render(
            resume_text=resume_text,
            job_description=job_description,
            company=company,
        )

    def get_opening_question_prompt(self, company: str, blueprint: Blueprint, mode: Mode) -> str:
        """
        Render the opening question prompt.

        Sample questions whose type matches the mode (at most two) are offered as
        seeds the model may adapt.
        """
        mode = Mode(mode)
        return self._templates["opening_question"].render(
            company=company,
            mode=mode.value.upper(),
            role_focus=", ".join(blueprint.role_focus),
            risk_gaps=", ".join(blueprint.risk_gaps),
            company_notes=bullet_list(blueprint.company_notes),
            seed_questions=bullet_list(blueprint.questions_for(mode)),
        )

    def get_follow_up_prompt(self, company: str, mode: Mode, transcript: str, candidate_answer: str) -> str:
        return self._templates["follow_up"].render(
            company=company,
            mode=Mode(mode).value.upper(),
            transcript=transcript,
            candidate_answer=candidate_answer,
        )


# Global instance for reuse across the application
secure_prompt_manager = SecurePromptManager()
