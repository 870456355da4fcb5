from typing import Any, List, Tuple
import json
import logging
import re

from studyguide.errors import DecodeFailure

logger = logging.getLogger(__name__)

# Characters of the raw response kept for diagnostics on failure
PREVIEW_CHARS = 500

_LEADING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?\s*```\s*$")

# Tail patterns, only applied when they start outside a string.
# `, "key":` or `{"key":` with no value, `, "unterminated` / `{"unterminated` key,
# and a comma with nothing after it. A leading `{` is kept.
_DANGLING_KEY = re.compile(r'(?:,|(?P<opener>\{))\s*"(?:[^"\\]|\\.)*"\s*:\s*$')
_DANGLING_FRAGMENT = re.compile(r'(?:,|(?P<opener>\{))\s*"[^"]*$')
_TRAILING_COMMA = re.compile(r",\s*$")

_CLOSERS = {"{": "}", "[": "]"}


# Remove markdown code fences around a payload
def strip_code_fences(text: str) -> str:
    cleaned = _LEADING_FENCE.sub("", text or "", count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


# Walk the text once, tracking string state and open containers.
# Returns (ends_inside_string, stack_of_open_containers)
def _scan_structure(text: str) -> Tuple[bool, List[str]]:
    in_string = False
    escaped = False
    stack: List[str] = []

    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(ch)
        elif ch in ("}", "]") and stack and _CLOSERS[stack[-1]] == ch:
            stack.pop()

    return in_string, stack


# Cut a tail pattern off the end, unless the match begins inside a string
def _trim_tail(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    if match is None:
        return text

    in_string, _ = _scan_structure(text[: match.start()])
    if in_string:
        return text

    return text[: match.start()] + (match.groupdict().get("opener") or "")


# Drop commas that directly precede a closer; string contents are left alone
def _drop_commas_before_closers(text: str) -> str:
    out: List[str] = []
    in_string = False
    escaped = False

    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in ("}", "]"):
            i = len(out) - 1
            while i >= 0 and out[i].isspace():
                i -= 1
            if i >= 0 and out[i] == ",":
                del out[i]
        out.append(ch)

    return "".join(out)


def repair_json_text(text: str) -> str:
    """
    Apply the fixed repair sequence to a JSON-like payload.

    1. drop a dangling trailing key fragment and stray commas
    2. close an unterminated string
    3. close open arrays/objects, innermost first

    The result is not guaranteed to parse; callers must still try.
    """
    cleaned = strip_code_fences(text)

    cleaned = _trim_tail(_DANGLING_KEY, cleaned)
    cleaned = _trim_tail(_DANGLING_FRAGMENT, cleaned)
    cleaned = _trim_tail(_TRAILING_COMMA, cleaned)
    cleaned = _drop_commas_before_closers(cleaned)

    in_string, _ = _scan_structure(cleaned)
    if in_string:
        cleaned += '"'

    _, stack = _scan_structure(cleaned)
    cleaned += "".join(_CLOSERS[opener] for opener in reversed(stack))

    return cleaned


# Json parse with one bounded repair attempt
def parse_json_or_throw(text: str) -> Any:
    cleaned = strip_code_fences(text)

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    logger.info("Direct JSON parse failed, attempting repair (%d chars)", len(cleaned))
    repaired = repair_json_text(cleaned)

    try:
        return json.loads(repaired)
    except json.JSONDecodeError as e:
        preview = (text or "")[:PREVIEW_CHARS]
        logger.error("JSON repair failed: %s. Raw response (first %d chars): %r", e, PREVIEW_CHARS, preview)
        raise DecodeFailure("LLM response is not valid JSON after repair", preview=preview) from e
