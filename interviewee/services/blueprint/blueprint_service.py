"""
Blueprint Service Module

This module turns a resume, a job description and a company name into an interview
blueprint with a single model call. It renders the blueprint prompt, runs it through
the model gateway's fallback list and parses the JSON the model returns.

Parsing is tolerant of prose or markdown fences around the JSON object. When the
output still cannot be decoded into a Blueprint, the raw text is returned together
with the parser error instead of being thrown away.

Dependencies:
- pydantic: For blueprint validation.
- loguru: For logging operations.
- interviewee.core.secure_prompt_manager: For the blueprint prompt.
- interviewee.services.model_gateway: For model access.
- interviewee.helper.extract_json_object: For locating the JSON object in model output.
"""

import json
from typing import NamedTuple, Optional
from loguru import logger
from pydantic import ValidationError
from interviewee.core.secure_prompt_manager import secure_prompt_manager
from interviewee.errors.interview_errors import BlueprintParseError, InvalidInputError
from interviewee.helper.extract_json_object import extract_json_object
from interviewee.schemas.blueprint.blueprint import Blueprint
from interviewee.services.model_gateway.model_gateway import ModelGateway


class BlueprintResult(NamedTuple):
    """
    Outcome of a blueprint generation call that reached the model.

    Exactly one of blueprint and parse_error is set.
    """
    blueprint: Optional[Blueprint]
    raw: str
    parse_error: Optional[str]
    model_id: str

    @property
    def ok(self) -> bool:
        return self.blueprint is not None


def parse_blueprint(raw: str) -> Blueprint:
    """
    Parse model output into a Blueprint.

    Args:
        raw (str): Model output, possibly with text around the JSON object.

    Returns:
        Blueprint: The parsed blueprint.

    Raises:
        BlueprintParseError: If the output is not valid JSON or does not match the
            blueprint schema (including a "mixed" interview type).
    """
    try:
        data = extract_json_object(raw)
    except json.JSONDecodeError as e:
        raise BlueprintParseError(f"Failed to parse JSON: {e}", raw) from e
    try:
        return Blueprint.model_validate(data)
    except ValidationError as e:
        raise BlueprintParseError(f"Blueprint does not match schema: {e}", raw) from e


def validate_blueprint_inputs(resume_text: str, job_description: str, company: str) -> None:
    if not all(value and value.strip() for value in (resume_text, job_description, company)):
        raise InvalidInputError("Missing inputs")


async def generate_blueprint(
    gateway: ModelGateway,
    resume_text: str,
    job_description: str,
    company: str,
) -> BlueprintResult:
    """
    Generate an interview blueprint.

    Args:
        gateway (ModelGateway): Model access.
        resume_text (str): Candidate resume as plain text.
        job_description (str): Job description as plain text.
        company (str): Target company.

    Returns:
        BlueprintResult: The blueprint, or the raw output and parse error when the
            model answered with something that is not a valid blueprint.

    Raises:
        InvalidInputError: If any input is missing or blank.
        ConfigurationError: If no model credential is configured.
        NoModelAvailableError: If every candidate model identifier was not found.
        ModelGatewayError: For transient exhaustion or fatal model failures.

    Example:
        >>> result = await generate_blueprint(gateway, resume, jd, "Acme")
        >>> if result.ok:
        ...     print(result.blueprint.likely_interview_type)
        ... else:
        ...     print(result.parse_error, result.raw)
    """
    validate_blueprint_inputs(resume_text, job_description, company)

    prompt = secure_prompt_manager.get_blueprint_prompt(
        resume_text=resume_text,
        job_description=job_description,
        company=company,
    )
    generation = await gateway.generate_with_fallback(prompt)
    raw = generation.text or ""

    try:
        blueprint = parse_blueprint(raw)
    except BlueprintParseError as e:
        logger.warning(f"Blueprint from {generation.model_id} could not be parsed: {e.parse_error}")
        return BlueprintResult(blueprint=None, raw=raw, parse_error=e.parse_error, model_id=generation.model_id)

    logger.info(
        f"Blueprint generated by {generation.model_id}: type={blueprint.likely_interview_type.value}, "
        f"{len(blueprint.sample_questions)} sample questions"
    )
    return BlueprintResult(blueprint=blueprint, raw=raw, parse_error=None, model_id=generation.model_id)
