"""
Data models for INTERAC e-Transfer parsing.

Frozen records flow from the decoder through the analyzers to the
assembled TransferRecord; the mutable ones describe one pipeline run.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Recipient:
    """First entry of an address header (To, From or Reply-To)."""
    name: str
    address: str


@dataclass(frozen=True)
class RawMessage:
    """
    Decoded email handed to the parser.

    Attributes:
        subject: Subject line
        text: Plain text body (newline separated)
        to: First "To" entry, or None
        from_: First "From" entry, or None
        reply_to: First "Reply-To" entry, or None
        message_id: Message-ID header
        date: Date header as a datetime (None if missing or unparseable)
        uid: Storage identifier (e.g., S3 object key)
        server_id: Server identifier (e.g., S3 bucket name)
    """
    subject: str
    text: str
    to: Optional[Recipient] = None
    from_: Optional[Recipient] = None
    reply_to: Optional[Recipient] = None
    message_id: Optional[str] = None
    date: Optional[datetime] = None
    uid: Optional[str] = None
    server_id: Optional[str] = None


@dataclass(frozen=True)
class SubjectFacts:
    """Facts derived from the subject line alone."""
    text: str
    language: Optional[str]
    is_email_transfer: bool
    is_auto_deposit: bool


@dataclass(frozen=True)
class BodyFacts:
    """
    Facts derived from the plain text body alone.

    Attributes:
        text: Normalized body (lines trimmed, blank lines removed)
        language: Language of the greeting, or None
        is_auto_deposit: Body mentions the automatic deposit phrase
        from_name: Upper-case sender name read from the second line
        message: Sender's message, if any
        reference: Reference number, if any
        amount: Parsed amount (may be NaN when parsing failed)
        amount_text: Raw text last handed to the number parser
        currency: Currency code, if any
        is_valid_amount: Amount parsed as a finite number
    """
    text: str
    language: Optional[str] = None
    is_auto_deposit: bool = False
    from_name: str = ''
    message: Optional[str] = None
    reference: Optional[str] = None
    amount: Optional[float] = None
    amount_text: Optional[str] = None
    currency: Optional[str] = None
    is_valid_amount: bool = False


@dataclass(frozen=True)
class TransferRecord:
    """
    Structured record of one e-Transfer notification.

    errors is either None or a non-empty tuple of distinct messages.
    """
    version: str
    uid: Optional[str]
    server_id: Optional[str]
    message_id: Optional[str]
    date: Optional[datetime]
    to_name: Optional[str]
    to_email: Optional[str]
    from_name: Optional[str]
    from_email: Optional[str]
    reply_to_name: Optional[str]
    reply_to_email: Optional[str]
    language: Optional[str]
    amount: Optional[float]
    currency: Optional[str]
    reference: Optional[str]
    is_auto_deposit: bool
    user_message: Optional[str]
    is_email_transfer: bool
    body: str
    subject: str
    errors: Optional[Tuple[str, ...]] = None

    @property
    def is_valid(self) -> bool:
        """True when no validation error was recorded."""
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the JSON document shape consumed downstream.

        Returns:
            Dict with camelCase keys; date rendered as ISO 8601
        """
        return {
            'version': self.version,
            'uid': self.uid,
            'serverId': self.server_id,
            'messageId': self.message_id,
            'date': self.date.isoformat() if self.date else None,
            'toName': self.to_name,
            'toEmail': self.to_email,
            'fromName': self.from_name,
            'fromEmail': self.from_email,
            'replyToName': self.reply_to_name,
            'replyToEmail': self.reply_to_email,
            'language': self.language,
            'amount': self.amount,
            'currency': self.currency,
            'reference': self.reference,
            'isAutoDeposit': self.is_auto_deposit,
            'userMessage': self.user_message,
            'isEmailTransfer': self.is_email_transfer,
            'body': self.body,
            'subject': self.subject,
            'errors': list(self.errors) if self.errors else None,
        }


@dataclass
class EmailMetadata:
    """
    Structured email metadata extracted from SES notification.

    Attributes:
        message_id: Unique SQS message identifier
        from_address: Email sender address
        to_addresses: List of recipient addresses
        subject: Email subject line
        timestamp: ISO 8601 timestamp when email was received
        bucket_name: S3 bucket containing the raw email
        object_key: S3 object key for the raw email
    """
    message_id: str
    from_address: str
    to_addresses: List[str]
    subject: str
    timestamp: str
    bucket_name: str
    object_key: str


@dataclass
class ProcessingResult:
    """
    Result of processing one SQS record.

    success reports whether the pipeline ran to completion; a parsed
    record that carries validation errors is still a success and is
    flagged through needs_review.

    Attributes:
        success: Whether processing succeeded
        message_id: SQS message identifier
        metadata: Email metadata (if parsing succeeded)
        record: Parsed transfer record (if decoding succeeded)
        result_key: S3 key of the uploaded JSON record (if uploaded)
        error_message: Error description (if processing failed)
    """
    success: bool
    message_id: str
    metadata: Optional[EmailMetadata] = None
    record: Optional[TransferRecord] = None
    result_key: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def needs_review(self) -> bool:
        """True when the transfer record carries validation errors."""
        return self.record is not None and not self.record.is_valid

    @property
    def should_delete_message(self) -> bool:
        """Records are always consumed; failures are logged, never redelivered."""
        return True

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return f"ProcessingResult(success=True, message_id={self.message_id}, needs_review={self.needs_review})"
        else:
            return f"ProcessingResult(success=False, message_id={self.message_id}, error={self.error_message})"
