"""HTML and text cleaning utilities."""

import html
import re

# Soft cap on headlines synthesized from a description
DESCRIPTION_HEADLINE = 45

_BR_RE = re.compile(r"<br\s*/*\s*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_SENTENCE_END_RE = re.compile(r"[.,?!:;]+")


def decode_entities(text: str | None) -> str:
    """Decode HTML entities (named, decimal and hex)."""
    if not text:
        return ""
    return html.unescape(text)


def strip_tags(text: str | None) -> str:
    """Turn <br> into newlines and replace every other tag with a space."""
    if not text:
        return ""
    text = _BR_RE.sub("\n", text)
    return _TAG_RE.sub(" ", text)


def description_headline(description: str | None, max_length: int = DESCRIPTION_HEADLINE) -> str | None:
    """
    Build a short headline out of a description.

    Takes the text before the first sentence-ending punctuation, then adds
    whole words until the result is longer than ``max_length``. The word
    that crosses the cap is kept. An ellipsis is always appended.

    Examples:
        "<p>Perl 5.8 released. Get it now</p>" -> "Perl 5..."
        "Quarterly numbers are in" -> "Quarterly numbers are in..."

    Returns:
        The synthesized headline, or None when nothing usable is left
    """
    text = strip_tags(description)
    first_clause = _SENTENCE_END_RE.split(text)[0].strip()

    built = ""
    for word in first_clause.split():
        if built:
            built += " "
        built += word
        if len(built) > max_length:
            break

    if not built:
        return None
    return built + "..."
