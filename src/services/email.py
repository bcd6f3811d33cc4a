"""
Email decoding utilities.

This module turns a raw RFC 5322 message into the RawMessage consumed by
the INTERAC parser: subject, plain text body, first recipient of each
address header, Message-ID and Date.
"""

import logging
from datetime import datetime
from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from typing import Optional

from interac.models import RawMessage, Recipient

logger = logging.getLogger(__name__)


def extract_text_body(msg: EmailMessage) -> str:
    """
    Extract the first text/plain part of a parsed email.

    Attachments are skipped. HTML-only emails give an empty string.

    Args:
        msg: Email parsed with policy.default

    Returns:
        str: Plain text body ('' if there is none)
    """
    if not msg.is_multipart():
        content_type = msg.get_content_type()
        if content_type == "text/plain":
            return msg.get_content()
        logger.warning(
            f"Unsupported content type for non-multipart email: {content_type}. "
            f"Body will be empty."
        )
        return ''

    for part in msg.walk():
        content_disposition = str(part.get("Content-Disposition", ""))
        if "attachment" in content_disposition:
            continue

        if part.get_content_type() == "text/plain":
            try:
                # get_content() handles quoted-printable, base64, etc automatically
                return part.get_content()
            except Exception as e:
                logger.warning(f"Failed to decode text body with get_content(): {e}")
                # Fallback: manual decode with get_payload(decode=True)
                payload = part.get_payload(decode=True)
                if payload:
                    return payload.decode('utf-8', errors='ignore')

    logger.warning("No text/plain part found in email, body will be empty")
    return ''


def first_recipient(msg: EmailMessage, header_name: str) -> Optional[Recipient]:
    """
    Return the first address of an address header.

    Args:
        msg: Email parsed with policy.default
        header_name: Header to read (e.g., "To", "From", "Reply-To")

    Returns:
        Recipient, or None if the header is absent or holds no address
    """
    header = msg.get(header_name)
    if header is None:
        return None

    addresses = getattr(header, 'addresses', ())
    if not addresses:
        return None

    first = addresses[0]
    return Recipient(name=first.display_name or '', address=first.addr_spec)


def _parse_date(msg: EmailMessage) -> Optional[datetime]:
    """Read the Date header as a datetime (None if missing or invalid)."""
    try:
        header = msg.get('Date')
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid Date header: {e}")
        return None

    if header is None:
        return None
    return getattr(header, 'datetime', None)


def decode_message(
    email_content: bytes,
    uid: Optional[str] = None,
    server_id: Optional[str] = None
) -> RawMessage:
    """
    Parse raw email bytes into a RawMessage.

    Args:
        email_content: Raw email bytes (e.g., from S3)
        uid: Storage identifier to carry into the record
        server_id: Server identifier to carry into the record

    Returns:
        RawMessage ready for interac.parser.parse

    Raises:
        ValueError: If email content is empty

    Example:
        >>> raw = b"Subject: INTERAC e-Transfer: test\\r\\n\\r\\nHi SAMPLE LANDLORD,"
        >>> decode_message(raw).subject
        'INTERAC e-Transfer: test'
    """
    if not email_content:
        raise ValueError("Email content cannot be empty")

    msg = BytesParser(policy=policy.default).parsebytes(email_content)

    message_id = msg.get('Message-ID')
    raw = RawMessage(
        subject=str(msg.get('Subject', '')),
        text=extract_text_body(msg),
        to=first_recipient(msg, 'To'),
        from_=first_recipient(msg, 'From'),
        reply_to=first_recipient(msg, 'Reply-To'),
        message_id=str(message_id).strip() if message_id else None,
        date=_parse_date(msg),
        uid=uid,
        server_id=server_id
    )

    logger.info(f"Decoded email: message_id={raw.message_id}, subject={raw.subject}")
    return raw
