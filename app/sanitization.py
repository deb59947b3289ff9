"""Text sanitization applied to free-text record fields before structural validation.

Markup is removed entirely, residual entities are decoded, stray angle brackets are
dropped, and whitespace is squished.  The transform is total and idempotent.
"""

import html
import re
from typing import Any, Dict, Iterable

import bleach

# Elements whose content is code, not text.  bleach strips the tags but keeps the inner text,
# so these are pruned with their content first.
_PRUNED_ELEMENTS_RE = re.compile(
    r'<\s*(script|style|iframe|object|embed|noscript|template)\b[^>]*>.*?<\s*/\s*\1\s*>',
    re.IGNORECASE | re.DOTALL,
)
_UNCLOSED_PRUNED_ELEMENT_RE = re.compile(r'<\s*(script|style|iframe|object|embed)\b.*\Z', re.IGNORECASE | re.DOTALL)
_ANGLE_BRACKETS_RE = re.compile(r'[<>]')


def _unescape(text: str) -> str:
    # Decode until stable so a second pass has nothing left to decode.
    previous = None
    while text != previous:
        previous, text = text, html.unescape(text)
    return text


def sanitize(value: Any) -> Any:
    """
    Strip markup from a string and normalise its whitespace.

    None and non-string values are returned unchanged.  A string that held only markup or
    whitespace becomes the empty string.
    """

    if not isinstance(value, str):
        return value

    text = _PRUNED_ELEMENTS_RE.sub('', value)
    text = _UNCLOSED_PRUNED_ELEMENT_RE.sub('', text)
    text = bleach.clean(text, tags=set(), attributes={}, strip=True, strip_comments=True)
    text = _unescape(text)
    text = _ANGLE_BRACKETS_RE.sub('', text)

    return ' '.join(text.split())


class SanitizationPolicy:
    """
    Sanitizes a fixed set of fields on a record's write set.  Fields outside the policy, and
    fields absent from the write set, are left untouched.
    """

    def __init__(self, fields: Iterable[str]):
        self.fields = tuple(fields)

    def __contains__(self, field: str) -> bool:
        return field in self.fields

    def apply(self, values: Dict[str, Any]) -> Dict[str, Any]:
        sanitized = dict(values)
        for field in self.fields:
            if field in sanitized:
                sanitized[field] = sanitize(sanitized[field])
        return sanitized
