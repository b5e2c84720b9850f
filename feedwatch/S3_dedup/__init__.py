"""Step 3: Identity-based novelty detection."""

from .fingerprint import canonicalize_url, hash_headline, normalize_headline, resolve_identity
from .filter import classify

__all__ = [
    "canonicalize_url",
    "hash_headline",
    "normalize_headline",
    "resolve_identity",
    "classify",
]
