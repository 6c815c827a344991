"""Custom validators and sanitizers"""

import re
from typing import Optional
import bleach
from email_validator import validate_email, EmailNotValidError

def validate_email_address(email: str) -> str:
    """Validate and normalize email"""
    email = email.strip().lower()

    try:
        validation = validate_email(email, check_deliverability=False)
        return validation.normalized
    except EmailNotValidError as e:
        raise ValueError(str(e))

def normalize_text(text: str) -> str:
    """Collapse runs of whitespace and trim"""
    return re.sub(r"\s+", " ", text).strip()

def sanitize_html(html: str, allowed_tags: Optional[list] = None) -> str:
    """Strip markup from free text such as product descriptions"""
    if allowed_tags is None:
        allowed_tags = ['b', 'em', 'i', 'strong', 'br']

    return bleach.clean(
        html,
        tags=allowed_tags,
        attributes={},
        strip=True
    )

def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()
