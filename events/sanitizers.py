# events/sanitizers.py
"""
Input sanitization and validation for the scheduler.

All user-generated content should pass through these functions
before being stored or rendered.
"""
import re
from typing import Optional

import bleach


# Allowed HTML tags for event descriptions
ALLOWED_TAGS = [
    'p', 'br', 'strong', 'em', 'u', 'a', 'ul', 'ol', 'li', 'code'
]

ALLOWED_ATTRIBUTES = {
    'a': ['href', 'title'],
}

HEX_COLOR_PATTERN = re.compile(r'^#[0-9a-fA-F]{6}$')


class ValidationError(Exception):
    """Raised when validation fails."""
    pass


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_html(html: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Sanitize HTML content, removing dangerous elements.
    """
    if html is None:
        return ""

    clean = bleach.clean(
        html.strip(),
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        strip=True
    )

    if max_length and len(clean) > max_length:
        clean = clean[:max_length]

    return clean


def sanitize_name(name: Optional[str], max_length: int = 255) -> str:
    """
    Sanitize event/team names.

    - No HTML
    - Single line (no newlines)
    """
    text = sanitize_text(name, max_length=max_length)
    text = bleach.clean(text, tags=[], strip=True)
    # Replace newlines with spaces
    text = re.sub(r'[\r\n]+', ' ', text)
    # Collapse multiple spaces
    text = re.sub(r'\s+', ' ', text)
    if not text:
        raise ValidationError("Name cannot be blank")
    return text


def sanitize_description(description: Optional[str]) -> str:
    """
    Sanitize event descriptions.

    - Max 5000 characters
    - Limited HTML
    """
    return sanitize_html(description, max_length=5000)


def validate_color(value: Optional[str]) -> str:
    """
    Validate a team display color in #RRGGBB form. Returned lower-cased.
    """
    if not value:
        raise ValidationError("Color is required")

    value = sanitize_text(value, max_length=16)
    if not HEX_COLOR_PATTERN.match(value):
        raise ValidationError("Color must be a hex value like #1d4ed8")

    return value.lower()
