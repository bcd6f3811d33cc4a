"""
Subject line analysis.
"""

import logging
from typing import Optional

from .language import starts_with_token, contains_token
from .models import SubjectFacts

logger = logging.getLogger(__name__)


def parse_subject(text: Optional[str]) -> SubjectFacts:
    """
    Derive language and transfer flags from the subject line.

    A subject is a transfer notification only when it starts with the
    subject_start marker of a known language; that match also sets the
    language.

    Args:
        text: Raw subject line (None is treated as empty)

    Returns:
        SubjectFacts for the subject
    """
    text = text or ''
    lowered = text.lower()

    language = starts_with_token(lowered, 'subject_start')
    is_auto_deposit = contains_token(lowered, 'automatic_deposit') is not None

    facts = SubjectFacts(
        text=text,
        language=language,
        is_email_transfer=language is not None,
        is_auto_deposit=is_auto_deposit
    )
    logger.debug(f"Subject facts: language={facts.language}, "
                 f"transfer={facts.is_email_transfer}, auto_deposit={facts.is_auto_deposit}")
    return facts
