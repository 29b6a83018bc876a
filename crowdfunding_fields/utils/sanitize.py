"""
Input Sanitization Utilities

Plain-text sanitization for submitted field values and attribute escaping
for values embedded in admin markup.
"""

import re
from typing import Any, Optional

import bleach
from markupsafe import Markup

# Blocks whose content is code, not text, and is dropped entirely
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)

# C0 controls and DEL; whitespace controls are folded into spaces separately
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

_WHITESPACE_RE = re.compile(r"\s+")

# "&" that does not start a named, decimal or hex character reference
_BARE_AMPERSAND_RE = re.compile(r"&(?!(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)")

_ATTR_ESCAPES = (
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
)


def sanitize_plain_text(text: Optional[str]) -> str:
    """
    Strip all HTML tags and return plain text only.
    Useful for titles, subtitles, labels, etc.

    Args:
        text: The text to sanitize

    Returns:
        Plain text with HTML tags stripped
    """
    if text is None:
        return ""

    # Strip all HTML tags
    cleaned = bleach.clean(text, tags=[], strip=True)

    # Normalize whitespace
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()

    return cleaned


def sanitize_text_field(value: Any) -> str:
    """
    Sanitize a single-line text value submitted through a form.

    - script/style blocks are removed together with their content
    - every other tag is stripped, keeping its text
    - control characters are removed
    - line breaks, tabs and runs of whitespace collapse to one space
    - leading and trailing whitespace is trimmed
    - "&" and ">" are kept literal; a stray "<" is stored as "&lt;"

    Never raises: None and non-scalar values sanitize to "".

    Args:
        value: The submitted value

    Returns:
        Sanitized plain text
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return ""

    text = _SCRIPT_STYLE_RE.sub("", value)
    text = _CONTROL_CHARS_RE.sub("", text)
    cleaned = sanitize_plain_text(text)

    # bleach escapes text it leaves behind; only "<" can start markup
    return cleaned.replace("&gt;", ">").replace("&amp;", "&")


def esc_attr(value: Optional[Any]) -> Markup:
    """
    Escape a value for use inside a double- or single-quoted HTML attribute.

    Character references already present (``&amp;``, ``&#39;``, ``&lt;``)
    are left as they are, so a stored "&lt;3" displays as "<3" and not as
    the literal entity.

    Returns Markup so Jinja2 autoescaping leaves the result alone.
    """
    if value is None:
        return Markup("")
    text = _BARE_AMPERSAND_RE.sub("&amp;", str(value))
    for char, entity in _ATTR_ESCAPES:
        text = text.replace(char, entity)
    return Markup(text)
