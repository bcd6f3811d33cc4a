"""
Cross-validation and assembly of INTERAC e-Transfer records.

The subject and the body are analyzed independently, then reconciled
into one TransferRecord. Inconsistencies never raise; each one adds a
message to the record's error list.
"""

import logging
from typing import List, Optional, Tuple

from .body import parse_body
from .models import BodyFacts, RawMessage, Recipient, SubjectFacts, TransferRecord
from .subject import parse_subject

logger = logging.getLogger(__name__)

PARSER_VERSION = "2.0"

SUBJECT_ERROR = "Subject does not start with 'INTERAC e-Transfer' or 'Virement INTERAC'."
LANGUAGE_ERROR = "Subject and body language does not match."
AUTO_DEPOSIT_ERROR = "Subject and body auto-deposit does not match."


def validate(subject: SubjectFacts, body: BodyFacts) -> List[str]:
    """
    Check the subject and body facts against each other.

    All checks run; none short-circuits the others.

    Returns:
        List of error messages (empty if consistent)
    """
    errors = []

    if not subject.is_email_transfer:
        errors.append(SUBJECT_ERROR)
    if not body.is_valid_amount:
        errors.append(f"Amount is not a valid number: {body.amount_text}")
    if subject.language != body.language:
        errors.append(LANGUAGE_ERROR)
    if subject.is_auto_deposit != body.is_auto_deposit:
        errors.append(AUTO_DEPOSIT_ERROR)

    return errors


def _name_and_address(recipient: Optional[Recipient]) -> Tuple[Optional[str], Optional[str]]:
    if recipient is None:
        return None, None
    return recipient.name, recipient.address


def parse(message: RawMessage) -> TransferRecord:
    """
    Parse a decoded INTERAC notification into a TransferRecord.

    Args:
        message: Decoded email (subject, plain text body, recipients)

    Returns:
        TransferRecord with best-effort values; errors is None when the
        subject and body agree and the amount is valid

    Example:
        >>> record = parse(RawMessage(subject=subject, text=body))
        >>> record.amount, record.currency
        (5.25, 'CAD')
    """
    subject = parse_subject(message.subject)
    body = parse_body(message.text)
    errors = validate(subject, body)

    to_name, to_email = _name_and_address(message.to)
    from_name, from_email = _name_and_address(message.from_)
    reply_to_name, reply_to_email = _name_and_address(message.reply_to)

    record = TransferRecord(
        version=PARSER_VERSION,
        uid=message.uid,
        server_id=message.server_id,
        message_id=message.message_id,
        date=message.date,
        to_name=to_name,
        to_email=to_email,
        from_name=from_name,
        from_email=from_email,
        reply_to_name=reply_to_name,
        reply_to_email=reply_to_email,
        language=body.language or subject.language,
        amount=body.amount if body.is_valid_amount else None,
        currency=body.currency,
        reference=body.reference,
        is_auto_deposit=body.is_auto_deposit and subject.is_auto_deposit,
        user_message=body.message,
        is_email_transfer=subject.is_email_transfer and body.is_valid_amount,
        body=body.text,
        subject=subject.text,
        errors=tuple(errors) or None
    )

    if errors:
        logger.debug(f"Parsed {message.message_id} with {len(errors)} error(s): {errors}")
    else:
        logger.debug(f"Parsed {message.message_id}: {record.amount} {record.currency}")

    return record
