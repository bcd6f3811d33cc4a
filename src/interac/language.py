"""
Language detection primitives over the token dictionary.

Matching is purely lexical. Languages are tried in TOKENS order and the
first match wins. Callers lowercase text before calling.
"""

from typing import Iterable, Optional

from .tokens import TOKENS, TOKEN_KEYS


def _markers(key: str):
    if key not in TOKEN_KEYS:
        raise ValueError(f"Unknown token key: {key}")
    return ((tokens.language, getattr(tokens, key)) for tokens in TOKENS)


def starts_with_token(text: str, key: str) -> Optional[str]:
    """
    Find the first language whose marker for key is a prefix of text.

    Args:
        text: Lowercase text to inspect
        key: Marker key (e.g., "greeting", "subject_start")

    Returns:
        Language tag, or None if no language matches

    Example:
        >>> starts_with_token("bonjour sample landlord,", "greeting")
        'fr'
    """
    for language, marker in _markers(key):
        if text.startswith(marker):
            return language
    return None


def contains_token(text: str, key: str) -> Optional[str]:
    """Find the first language whose marker for key appears anywhere in text."""
    for language, marker in _markers(key):
        if marker in text:
            return language
    return None


def token_starts_line(lines: Iterable[str], key: str) -> Optional[str]:
    """
    Return the first line that starts with the marker for key.

    Languages are tried in priority order, then lines in order. Each line
    is lowercased before comparison; the original line is returned.
    """
    lines = list(lines)
    for _, marker in _markers(key):
        for line in lines:
            if line.lower().startswith(marker):
                return line
    return None
