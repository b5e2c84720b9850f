"""Step 2: Clean headline and description text."""

from .html import (
    DESCRIPTION_HEADLINE,
    decode_entities,
    description_headline,
    strip_tags,
)

__all__ = [
    "DESCRIPTION_HEADLINE",
    "decode_entities",
    "description_headline",
    "strip_tags",
]
