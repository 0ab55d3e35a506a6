import json
import logging
import re
from typing import Any

from splitscan.receipt.errors import ParseError

logger = logging.getLogger("splitscan")

# ```json ... ``` (language tag optional), anchored to the ends of the text
_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\n?(?P<body>.*?)\n?[ \t]*```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    text = text.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group("body").strip()
    # Unbalanced fences: drop whichever end is present
    if text.startswith("```"):
        text = re.sub(r"^```[\w-]*", "", text, count=1)
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_response(raw: str | None) -> Any:
    """Decode the model's text into a generic JSON value.

    Tries the text as-is first, then with markdown code fences removed.
    Unknown keys are kept; the normalizer only looks at what it needs.
    """
    text = (raw or "").strip()
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        pass

    cleaned = strip_code_fence(text)
    try:
        return json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        logger.debug("Unparseable model output", extra={"extra_data": {"raw": text[:2000]}})
        raise ParseError(f"Response is not valid JSON: {e}") from e
