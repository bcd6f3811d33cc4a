"""
From SES notification to stored TransferRecord.

For every SQS record the processor reads the SES notification, fetches
the raw email from S3, decodes it, parses the INTERAC transfer and, when
a results bucket is configured, writes the record there as JSON.

process_ses_record never raises: pipeline failures come back as
ProcessingResult(success=False). A parsed record with validation errors
is a success flagged through needs_review.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from .models import EmailMetadata, ProcessingResult, TransferRecord
from .parser import parse
from services import email as email_service
from services import s3 as s3_service

logger = logging.getLogger(__name__)

# Configuration from environment
RESULTS_BUCKET = os.environ.get('RESULTS_S3_BUCKET', '')
RESULTS_KEY_PREFIX = os.environ.get('RESULTS_KEY_PREFIX', 'transfers/')


def _ses_notification(sqs_body: str) -> Dict[str, Any]:
    """Decode the SES notification carried by an SQS body, unwrapping an SNS envelope."""
    payload = json.loads(sqs_body)
    if payload.get('Type') == 'Notification' and 'Message' in payload:
        logger.info("Unwrapping SNS message (SES -> SNS -> SQS)")
        payload = json.loads(payload['Message'])

    if 'mail' not in payload or 'receipt' not in payload:
        raise ValueError("SES notification missing 'mail' or 'receipt' fields")
    return payload


def _as_address_list(value: Any) -> List[str]:
    # SES sends address headers as lists; a bare string is accepted as well
    if isinstance(value, str):
        return [value] if value else []
    return list(value or [])


class TransferEmailProcessor:
    """Runs INTERAC notification emails through decode, parse and storage."""

    def __init__(self, results_bucket: Optional[str] = None, key_prefix: Optional[str] = None):
        """
        Initialize the processor.

        Args:
            results_bucket: Bucket for parsed records (default: RESULTS_S3_BUCKET)
            key_prefix: Key prefix for parsed records (default: RESULTS_KEY_PREFIX)
        """
        self.results_bucket = RESULTS_BUCKET if results_bucket is None else results_bucket
        self.key_prefix = RESULTS_KEY_PREFIX if key_prefix is None else key_prefix

    def process_ses_record(self, record: Dict[str, Any]) -> ProcessingResult:
        """
        Process a single SQS record containing SES notification.

        Args:
            record: SQS record dict containing SES notification

        Returns:
            ProcessingResult with success=True or success=False (errors logged)
        """
        message_id = record.get('messageId', 'UNKNOWN')
        logger.info(f"Processing SQS message: {message_id}")

        try:
            metadata = self._parse_ses_notification(record)
            logger.info(f"Parsed: from={metadata.from_address}, subject={metadata.subject}")

            transfer = self._parse_transfer(metadata)
            result_key = self._store_record(metadata, transfer)

            self._log_processing_summary(metadata, transfer)

            return ProcessingResult(
                success=True,
                message_id=message_id,
                metadata=metadata,
                record=transfer,
                result_key=result_key
            )

        except Exception as e:
            logger.error(f"Failed to process {message_id}: {e}", exc_info=True)

            return ProcessingResult(
                success=False,
                message_id=message_id,
                error_message=str(e)
            )

    def _parse_ses_notification(self, record: Dict[str, Any]) -> EmailMetadata:
        """
        Build EmailMetadata from an SQS record (direct SES or SNS-wrapped).

        The sender falls back to the envelope 'source' when the From header
        is missing.

        Raises:
            ValueError: If mail, receipt or the S3 location is missing
            json.JSONDecodeError: If a body is not JSON
        """
        notification = _ses_notification(record['body'])
        mail = notification['mail']
        headers = mail.get('commonHeaders', {})
        action = notification['receipt'].get('action', {})

        bucket_name = action.get('bucketName')
        object_key = action.get('objectKey')
        if not bucket_name or not object_key:
            raise ValueError("Missing S3 location in SES notification")

        senders = _as_address_list(headers.get('from'))
        return EmailMetadata(
            message_id=record.get('messageId', 'UNKNOWN'),
            from_address=senders[0] if senders else mail.get('source', 'Unknown'),
            to_addresses=_as_address_list(headers.get('to')),
            subject=headers.get('subject', ''),
            timestamp=mail.get('timestamp', ''),
            bucket_name=bucket_name,
            object_key=object_key
        )

    def _parse_transfer(self, metadata: EmailMetadata) -> TransferRecord:
        """
        Fetch the raw email from S3 and parse it into a TransferRecord.

        The S3 object key and bucket become the record's uid and serverId.

        Raises:
            ValueError: If S3 fetch fails or the email is empty
        """
        logger.info(f"Fetching email from: s3://{metadata.bucket_name}/{metadata.object_key}")

        raw_email = s3_service.fetch_email_from_s3(
            metadata.bucket_name,
            metadata.object_key
        )
        logger.info(f"Fetched {len(raw_email):,} bytes from S3")

        message = email_service.decode_message(
            raw_email,
            uid=metadata.object_key,
            server_id=metadata.bucket_name
        )
        return parse(message)

    def result_key_for(self, metadata: EmailMetadata) -> str:
        """S3 key of the JSON record for an email."""
        return f"{self.key_prefix}{metadata.object_key}.json"

    def _store_record(self, metadata: EmailMetadata, transfer: TransferRecord) -> Optional[str]:
        """
        Upload the record as JSON when a results bucket is configured.

        Returns:
            The S3 key written, or None if storage is not configured
        """
        if not self.results_bucket:
            logger.info("Results bucket not configured, skipping upload")
            return None

        key = self.result_key_for(metadata)
        s3_service.upload_processed_result(
            bucket=self.results_bucket,
            key=key,
            content=json.dumps(transfer.to_dict(), ensure_ascii=False),
            content_type='application/json'
        )
        return key

    def _log_processing_summary(self, metadata: EmailMetadata, transfer: TransferRecord) -> None:
        """Log the parsed transfer; validation errors are logged as warnings."""
        logger.info("=" * 50)
        logger.info("TRANSFER EMAIL PROCESSED")
        logger.info(f"From: {metadata.from_address}")
        logger.info(f"Subject: {metadata.subject}")
        logger.info(f"Language: {transfer.language}")
        logger.info(f"Amount: {transfer.amount} {transfer.currency or ''}".rstrip())
        logger.info(f"Auto-deposit: {transfer.is_auto_deposit}")
        logger.info(f"Reference: {transfer.reference}")

        if transfer.errors:
            for error in transfer.errors:
                logger.warning(f"Validation error: {error}")

        logger.info("=" * 50)
