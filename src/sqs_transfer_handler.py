"""
Lambda entry point for INTERAC e-Transfer notifications (SES -> S3 -> SQS).

Each SQS record goes through TransferEmailProcessor. Records that the
processor marks for deletion are consumed even when they failed, so
SQS never redelivers a notification that cannot be parsed.
"""

import logging
import os
from typing import Dict, Any, List

from interac.email_processor import TransferEmailProcessor
from interac.models import ProcessingResult

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'dev')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


def _configure_logging(level: str) -> logging.Logger:
    """Set the root level; attach a console handler when the runtime has none (local runs)."""
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
        root.addHandler(handler)
    return root


logger = _configure_logging(LOG_LEVEL)

transfer_processor = TransferEmailProcessor()


def _log_outcome(result: ProcessingResult) -> None:
    if not result.success:
        logger.warning(f"⚠ Failed to process message {result.message_id}: {result.error_message}")
    elif result.needs_review:
        logger.warning(
            f"⚠ Message {result.message_id} needs review: {'; '.join(result.record.errors)}"
        )
    else:
        logger.info(f"✓ Parsed message {result.message_id}")


def _batch_failures(results: List[ProcessingResult]) -> List[Dict[str, str]]:
    return [
        {"itemIdentifier": result.message_id}
        for result in results
        if not result.should_delete_message
    ]


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Parse every INTERAC notification in an SQS batch.

    Args:
        event: SQS event carrying SES notifications
        context: Lambda context

    Returns:
        Dict with batchItemFailures listing records to redeliver
    """
    records = event.get('Records', [])
    logger.info(f"INTERAC transfer batch: {len(records)} message(s), environment={ENVIRONMENT}")

    results = [transfer_processor.process_ses_record(record) for record in records]
    for result in results:
        _log_outcome(result)

    failed = sum(1 for r in results if not r.success)
    review = sum(1 for r in results if r.needs_review)
    logger.info(
        f"Batch complete: parsed={len(results) - failed} needs_review={review} failed={failed}"
    )

    return {"batchItemFailures": _batch_failures(results)}
