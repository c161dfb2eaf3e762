import json
import logging
import re
from typing import Any, Callable, Optional

from ..errors import ParseError

logger = logging.getLogger(__name__)

_FENCE_OPENER = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSER = re.compile(r"\s*```\s*$")
_FENCED_BLOCK = re.compile(r"```.*?```", re.DOTALL)
# Up to three levels of nesting; deeper objects are left to the brace-slicing attempts.
_BALANCED_OBJECT = re.compile(r"\{(?:[^{}]|\{(?:[^{}]|\{[^{}]*\})*\})*\}")

_CHAPTER_PREAMBLES = (
    re.compile(r"^\s*Of course[.!]?\s*", re.IGNORECASE),
    re.compile(r"^\s*Here is (?:a |the )?(?:detailed )?chapter[^\n:.]*[:.]?\s*", re.IGNORECASE),
)
_SEPARATOR_LINE = re.compile(r"^\s*\*\*\*\s*$", re.MULTILINE)


def _slice_braces(text: str) -> Optional[str]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def _strip_fences_then_slice(text: str) -> Optional[str]:
    # Only an opening and a closing fence; ``` inside string values must survive.
    unfenced = _FENCE_CLOSER.sub("", _FENCE_OPENER.sub("", text, count=1), count=1)
    return _slice_braces(unfenced.strip())


def _drop_fenced_blocks(text: str) -> Optional[str]:
    return _FENCED_BLOCK.sub("", text).strip() or None


def _first_balanced_object(text: str) -> Optional[str]:
    match = _BALANCED_OBJECT.search(text)
    return match.group(0) if match else None


_ATTEMPTS: list[tuple[str, Callable[[str], Optional[str]]]] = [
    ("strip_fences", _strip_fences_then_slice),
    ("drop_fenced_blocks", _drop_fenced_blocks),
    ("slice_braces", _slice_braces),
    ("balanced_object", _first_balanced_object),
]


def parse_json_response(text: str) -> dict[str, Any]:
    """
    Locate and decode the single JSON object a model answer is supposed to contain.

    Tries progressively looser ways of finding the object (fence stripping, fenced
    block removal, brace slicing, a balanced-brace match) and returns the first
    one that decodes to a JSON object. The JSON itself is never repaired.

    Raises ParseError carrying the start of the raw text when nothing decodes.
    """
    if not isinstance(text, str):
        raise ParseError(repr(text))

    for name, locate in _ATTEMPTS:
        candidate = locate(text)
        if not candidate:
            continue
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as exc:
            logger.debug("JSON attempt %s failed: %s", name, exc)
            continue
        if isinstance(parsed, dict):
            if name != "strip_fences":
                logger.info("Recovered JSON from model output via %s", name)
            return parsed
        logger.debug("JSON attempt %s decoded a %s, not an object", name, type(parsed).__name__)

    raise ParseError(text)


def clean_chapter_text(text: str) -> str:
    """Strip conversational preambles and bare *** separators from chapter prose."""
    cleaned = text.strip()
    for pattern in _CHAPTER_PREAMBLES:
        cleaned = pattern.sub("", cleaned, count=1)
    cleaned = _SEPARATOR_LINE.sub("", cleaned)
    return cleaned.strip()
