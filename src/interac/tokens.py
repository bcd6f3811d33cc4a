"""
Per-language marker phrases used to read INTERAC notification emails.

Languages are matched in the order they appear in TOKENS, so English wins
over French whenever both markers match the same text.
"""

from dataclasses import dataclass, fields
from typing import Tuple


@dataclass(frozen=True)
class LanguageTokens:
    """
    Marker phrases for one language. All phrases are lowercase.

    Attributes:
        language: Language tag (e.g., "en", "fr")
        greeting: Phrase the body starts with
        message: Line prefix of the sender's message
        reference: Line prefix of the reference number
        subject_start: Phrase a transfer notification subject starts with
        automatic_deposit: Phrase present when funds were auto-deposited
        sent: Phrase following the sender's name in the body
    """
    language: str
    greeting: str
    message: str
    reference: str
    subject_start: str
    automatic_deposit: str
    sent: str


TOKENS: Tuple[LanguageTokens, ...] = (
    LanguageTokens(
        language='en',
        greeting='hi',
        message='message',
        reference='reference',
        subject_start='interac e-transfer',
        automatic_deposit='automatically deposited',
        sent='has sent',
    ),
    LanguageTokens(
        language='fr',
        greeting='bonjour',
        message='message',
        reference='référence',
        subject_start='virement interac',
        automatic_deposit='automatiquement',
        sent='vous',
    ),
)

# Marker keys shared by every language record
TOKEN_KEYS: Tuple[str, ...] = tuple(f.name for f in fields(LanguageTokens) if f.name != 'language')
