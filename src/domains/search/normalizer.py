"""
Turns raw model output into a SearchResponse.

Model output is usually JSON, but it arrives wrapped in prose, inside Markdown
fences, with trailing commas or cut off at the token limit. Each repair step
is a small function; normalize_completion chains them and never raises.
"""

import json
import logging
import re

from pydantic import ValidationError

from src.domains.search.schemas import AnswerItem, SearchResponse

logger = logging.getLogger(__name__)


FALLBACK_PEOPLE_ALSO_ASK: tuple[tuple[str, str], ...] = (
    (
        "What are the key benefits of this topic?",
        "This topic offers several advantages that can be beneficial in various contexts.",
    ),
    (
        "How does this compare to alternatives?",
        "Each approach has its own strengths and considerations to evaluate.",
    ),
    (
        "What are the potential drawbacks?",
        "Like any topic, there are some limitations and challenges to be aware of.",
    ),
    (
        "What should beginners know about this?",
        "Starting with the fundamentals and basic concepts is usually the best approach.",
    ),
    (
        "What are the future trends in this area?",
        "This field continues to evolve with new developments and innovations.",
    ),
)

# Shorter plain-text residue is noise; the raw completion is used instead.
MIN_PLAIN_TEXT_LENGTH = 10

_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")
_DIRECT_ANSWER_FIELD_RE = re.compile(r"[\"']?direct[_ ]answer[\"']?\s*:", re.IGNORECASE)
_PEOPLE_ALSO_ASK_FIELD_RE = re.compile(
    r"[\"']?people[_ ]also[_ ]ask[\"']?\s*:", re.IGNORECASE
)
_LEADING_ARTIFACT_RE = re.compile(
    r"^\s*\{?\s*(?:[\"']?direct[_ ]answer[\"']?\s*:)?\s*", re.IGNORECASE
)
_ARTIFACT_WORDS_RE = re.compile(
    r"\b(?:json|direct[_ ]answer|people[_ ]also[_ ]ask)\b[ \t]*", re.IGNORECASE
)
_LEADING_COLONS_RE = re.compile(r"^[\s:]+")
_STRUCTURAL_CHARS_RE = re.compile(r"[{}\[\]]")
_QUOTES = "\"'"


def fallback_people_also_ask() -> list[AnswerItem]:
    """Fresh copy of the filler follow-up set."""
    return [
        AnswerItem(question=question, answer=answer)
        for question, answer in FALLBACK_PEOPLE_ALSO_ASK
    ]


def extract_json_object(text: str) -> str | None:
    """
    Return the first balanced ``{...}`` substring of ``text``.

    Braces inside string literals are ignored. When the object never closes
    (output truncated at the token limit) the greedy span from the first ``{``
    to the last ``}`` is returned instead. Returns None when there is no
    candidate at all.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]

    end = text.rfind("}")
    if end > start:
        return text[start : end + 1]
    return None


def strip_code_fences(text: str) -> str:
    """Remove Markdown fence markers, including a language tag like ```json."""
    return _FENCE_RE.sub("", text).strip()


def remove_trailing_commas(text: str) -> str:
    """Drop commas directly followed (modulo whitespace) by ``}`` or ``]``."""
    out: list[str] = []
    in_string = False
    escaped = False
    length = len(text)

    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            out.append(char)
            continue

        if char == '"':
            in_string = True
        elif char == ",":
            lookahead = index + 1
            while lookahead < length and text[lookahead].isspace():
                lookahead += 1
            if lookahead < length and text[lookahead] in "}]":
                continue
        out.append(char)

    return "".join(out)


def parse_search_response(text: str) -> SearchResponse | None:
    """
    Best-effort structured parse. Returns None on any failure, including
    JSON that does not match the SearchResponse shape.
    """
    candidate = extract_json_object(text)
    if candidate is None:
        logger.warning("No JSON object found in model output")
        return None

    candidate = remove_trailing_commas(strip_code_fences(candidate))

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse model output as JSON: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Model output JSON is a {type(data).__name__}, not an object")
        return None

    try:
        return SearchResponse.model_validate(data)
    except ValidationError as e:
        logger.warning(
            f"Model output does not match the answer schema: {e.error_count()} error(s)"
        )
        return None


def extract_plain_text(raw: str) -> str:
    """
    Pull readable prose out of a completion that could not be parsed.

    Drops fences, the people_also_ask tail, field names and structural
    characters. Falls back to ``raw`` unchanged when too little is left.
    """
    text = strip_code_fences(raw)
    text = _PEOPLE_ALSO_ASK_FIELD_RE.split(text, maxsplit=1)[0]
    text = _DIRECT_ANSWER_FIELD_RE.sub("", text)
    text = _STRUCTURAL_CHARS_RE.sub("", text)
    text = text.strip().strip(",").strip()
    text = _strip_enclosing_quotes(text)

    if len(text) < MIN_PLAIN_TEXT_LENGTH:
        return raw
    return text


def synthesize_fallback(raw: str) -> SearchResponse:
    return SearchResponse(
        direct_answer=extract_plain_text(raw),
        people_also_ask=fallback_people_also_ask(),
    )


def _strip_enclosing_quotes(text: str) -> str:
    while len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTES:
        text = text[1:-1].strip()
    return text


def _scrub_once(text: str) -> str:
    text = _FENCE_RE.sub("", text)
    text = _LEADING_ARTIFACT_RE.sub("", text, count=1)
    text = _ARTIFACT_WORDS_RE.sub("", text)
    text = _LEADING_COLONS_RE.sub("", text)
    return _strip_enclosing_quotes(text.strip())


def scrub_direct_answer(text: str) -> str:
    """
    Remove formatting leakage from a direct answer.

    Every pass only deletes characters, so iterating to a fixed point
    terminates and makes the scrub idempotent.
    """
    while True:
        scrubbed = _scrub_once(text)
        if scrubbed == text:
            return scrubbed
        text = scrubbed


def normalize_completion(raw: str) -> SearchResponse:
    """
    Convert a non-blank completion into a valid SearchResponse.

    Parse failures are absorbed: the direct answer falls back to the
    completion's plain text and the follow-ups to the filler set.
    """
    response = parse_search_response(raw)
    if response is None:
        response = synthesize_fallback(raw)

    direct_answer = scrub_direct_answer(response.direct_answer)
    if not direct_answer:
        logger.warning("Direct answer empty after cleanup, using completion text")
        direct_answer = scrub_direct_answer(extract_plain_text(raw)) or raw.strip()

    return SearchResponse(
        direct_answer=direct_answer, people_also_ask=response.people_also_ask
    )
