# app/services/jobs/autofill.py
"""
Post-Job autofill: document -> text -> LLM `extract_job_info` object -> normalised form draft.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from app.core.errors import ValidationFailedError, UpstreamServiceError
from app.schemas.autofill import JobDraft
from app.services.common.document_parser import extract_document_text
from app.services.common.llm_client import get_llm_client, load_prompt
from app.services.jobs.catalog import (
    CURRENCIES, EMPLOYMENT_TYPES, INDUSTRIES, JOB_TITLES, LEGACY_SENIORITY, REMOTE_POLICIES, SENIORITY_LEVELS,
)

logger = logging.getLogger("jobs.autofill")

JOB_DESCRIPTION_PROMPT = load_prompt("jobs/job_description.prompt.txt")
MAX_INPUT_CHARS = 30000

_STRING = {"type": "string"}
_STRINGS = {"type": "array", "items": {"type": "string"}}

EXTRACT_JOB_INFO = {
    "name": "extract_job_info",
    "description": "Return the structured fields of a job posting.",
    "parameters": {
        "type": "object",
        "properties": {
            "title": _STRING,
            "description": _STRING,
            "company_name": _STRING,
            "industry": {"type": "string", "enum": list(INDUSTRIES)},
            "seniority": {"type": "string", "enum": list(SENIORITY_LEVELS)},
            "employment_type": {"type": "string", "enum": list(EMPLOYMENT_TYPES)},
            "location_type": {"type": "string", "enum": list(REMOTE_POLICIES)},
            "location": _STRING,
            "budget_currency": {"type": "string", "enum": list(CURRENCIES)},
            "budget_min": {"type": "number"},
            "budget_max": {"type": "number"},
            "skills_must": _STRINGS,
            "skills_nice": _STRINGS,
            "benefits": _STRINGS,
        },
        "required": ["title", "description"],
    },
}

_TITLE_LOOKUP = {t.lower(): t for t in JOB_TITLES if t != "Other"}
_INDUSTRY_LOOKUP = {i.lower(): i for i in INDUSTRIES}


def parse_job_description(text: str) -> dict[str, Any]:
    """Ask the LLM for the structured job fields. Raises UpstreamServiceError on an unusable answer."""
    text = (text or "").strip()
    if not text:
        raise ValidationFailedError("Job description text is required")
    if len(text) > MAX_INPUT_CHARS:
        logger.info("Truncating job description from %d to %d chars", len(text), MAX_INPUT_CHARS)
        text = text[:MAX_INPUT_CHARS]

    messages = [
        {"role": "system", "content": JOB_DESCRIPTION_PROMPT},
        {
            "role": "user",
            "content": "Parse this job description with the rules above and return the structured fields. "
                       "Be precise with titles and apply the section mapping accurately.\n\n" + text,
        },
    ]
    logger.info("Parsing job description with AI (%d chars)", len(text))
    response = get_llm_client().chat_json(messages, function=EXTRACT_JOB_INFO)
    data = response.data

    if response.error:
        logger.error("AI parse failed: %s", response.error)
        raise UpstreamServiceError("AI service could not parse the job description")
    # Some models wrap the object under the function name
    if isinstance(data.get("extract_job_info"), dict):
        data = data["extract_job_info"]
    if not _clean_str(data.get("title")) or not _clean_str(data.get("description")):
        logger.error("AI response missing title/description; keys=%s", list(data.keys()))
        raise UpstreamServiceError("AI response is missing the job title or description")
    return data


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _pick(value: Any, allowed) -> Optional[str]:
    s = _clean_str(value)
    return s if s in allowed else None


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None
    s = str(value).replace(",", "").strip()
    try:
        n = float(s)
    except ValueError:
        return None
    return n if n > 0 else None


def _skills(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    out: list[str] = []
    seen = set()
    for item in value:
        s = _clean_str(item)
        if s and s.lower() not in seen:
            seen.add(s.lower())
            out.append(s)
    return out


def build_job_draft(info: dict[str, Any]) -> JobDraft:
    draft = JobDraft()

    title = _clean_str(info.get("title"))
    if title:
        known = _TITLE_LOOKUP.get(title.lower())
        if known:
            draft.title = known
        else:
            draft.title = "Other"
            draft.custom_title = title

    draft.description = _clean_str(info.get("description"))
    draft.company_name = _clean_str(info.get("company_name"))
    industry = _clean_str(info.get("industry"))
    draft.industry = _INDUSTRY_LOOKUP.get(industry.lower()) if industry else None

    seniority = _clean_str(info.get("seniority"))
    if seniority:
        seniority = LEGACY_SENIORITY.get(seniority, seniority)
    draft.seniority = seniority if seniority in SENIORITY_LEVELS else None

    draft.employment_type = _pick(info.get("employment_type"), EMPLOYMENT_TYPES)
    draft.remote_policy = _pick(info.get("location_type") or info.get("remote_policy"), REMOTE_POLICIES)
    draft.location = _clean_str(info.get("location"))
    draft.budget_currency = _pick(info.get("budget_currency"), CURRENCIES)

    budget_min, budget_max = _number(info.get("budget_min")), _number(info.get("budget_max"))
    if budget_min is not None and budget_max is not None and budget_max < budget_min:
        budget_min, budget_max = budget_max, budget_min
    draft.budget_min, draft.budget_max = budget_min, budget_max

    draft.skills_must = _skills(info.get("skills_must"))
    draft.skills_nice = _skills(info.get("skills_nice"))
    draft.benefits = _skills(info.get("benefits"))
    return draft


def autofill_from_text(text: str) -> JobDraft:
    return build_job_draft(parse_job_description(text))


def autofill_from_document(filename: str, mime: Optional[str], data: bytes) -> tuple[JobDraft, int]:
    text = extract_document_text(filename, mime, data)
    if not text:
        raise ValidationFailedError("No readable text found in the uploaded file")
    return autofill_from_text(text), len(text)
