"""
Request boundary for the generator, independent of any web framework.

A web layer turns its request into (body, headers), calls one of these
handlers and copies the returned Response onto the wire.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional
import logging
import os

from studyguide.errors import public_message
from studyguide.generation.pipeline import DEFAULT_TIMEOUT_S, generate_study_guide
from studyguide.models.llm_client import InferenceService, LLMConfig
from studyguide.utils.pdf_parser import extract_text_from_pdf
from studyguide.utils.rate_limit import RateLimitResult, RateLimitStore, check_rate_limit, get_client_ip
from studyguide.utils.validation import validate_pdf_content, validate_pdf_file, validate_syllabus_text

logger = logging.getLogger(__name__)

GENERATE_ENDPOINT = "generate-guide"
PARSE_ENDPOINT = "parse-syllabus"

PARSE_FAILURE_MESSAGE = "Failed to parse PDF. Please ensure it is a valid, text-based PDF."


@dataclass
class Response:
    status: int
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


def _too_many_requests(limit: RateLimitResult) -> Response:
    return Response(
        status=429,
        body={
            "error": "Too many requests. Please try again later.",
            "retryAfter": limit.retry_after_s,
        },
        headers={"Retry-After": str(limit.retry_after_s)},
    )


def handle_parse_syllabus(
    pdf_path: Optional[str],
    headers: Mapping[str, str],
    store: RateLimitStore,
    filename: Optional[str] = None,
) -> Response:
    """
    Uploaded PDF -> syllabus text.

    The web layer saves the upload to `pdf_path` and passes the client's
    original `filename`. Bad files are 400, unreadable content is 422.
    """
    client_ip = get_client_ip(headers)
    limit = check_rate_limit(store, client_ip, PARSE_ENDPOINT)
    if not limit.allowed:
        return _too_many_requests(limit)

    check = validate_pdf_file(pdf_path)
    if not check.valid:
        return Response(status=400, body={"error": check.error})

    try:
        extracted = extract_text_from_pdf(pdf_path)
    except Exception:
        logger.exception("PDF parse error for client %s", client_ip)
        return Response(status=500, body={"error": PARSE_FAILURE_MESSAGE})

    content = validate_pdf_content(extracted["text"], extracted["page_count"])
    if not content.valid:
        return Response(status=422, body={"error": content.error})

    return Response(
        status=200,
        body={
            "text": extracted["text"],
            "pageCount": extracted["page_count"],
            "filename": filename or extracted["source_name"],
        },
    )


async def handle_generate_guide(
    body: Any,
    headers: Mapping[str, str],
    store: RateLimitStore,
    service: Optional[InferenceService] = None,
    cfg: Optional[LLMConfig] = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> Response:

    client_ip = get_client_ip(headers)
    limit = check_rate_limit(store, client_ip, GENERATE_ENDPOINT)

    if not limit.allowed:
        return _too_many_requests(limit)

    syllabus_text = body.get("syllabusText") if isinstance(body, dict) else None
    check = validate_syllabus_text(syllabus_text)
    if not check.valid:
        return Response(status=400, body={"error": check.error or "Invalid input"})

    try:
        guide = await generate_study_guide(syllabus_text, cfg=cfg, service=service, timeout_s=timeout_s)
    except Exception as e:
        # Full detail stays in the server log
        logger.exception("Generation error for client %s", client_ip)
        return Response(status=500, body={"error": public_message(e)})

    return Response(status=200, body=guide.to_dict())


def health_check() -> Response:
    checks = {
        "openrouter": bool(os.getenv("OPENROUTER_API_KEY")),
        "base_url": bool(os.getenv("STUDYGUIDE_BASE_URL")),
    }
    healthy = all(checks.values())

    return Response(
        status=200 if healthy else 503,
        body={
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
