"""
S3 access for the transfer pipeline.

Raw emails are read from the SES receipt bucket; parsed transfer records
are written back as JSON documents.
"""

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

# Single attempt; bounded connect and read times (seconds)
s3_client = boto3.client(
    's3',
    config=Config(
        retries={'max_attempts': 1, 'mode': 'standard'},
        connect_timeout=10,
        read_timeout=60
    )
)

# S3 error codes that mean the email is not there, with the message raised for each
_MISSING_EMAIL_ERRORS = {
    'NoSuchKey': "Email file not found in S3: {key}",
    'NoSuchBucket': "S3 bucket not found: {bucket}",
}


def fetch_email_from_s3(bucket: str, key: str) -> bytes:
    """
    Read the raw email SES stored at s3://bucket/key.

    Raises:
        ValueError: For NoSuchKey and NoSuchBucket
        ClientError: For any other S3 failure
    """
    try:
        response = s3_client.get_object(Bucket=bucket, Key=key)
    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', '')
        logger.error(f"Cannot read s3://{bucket}/{key}: {error_code or e}")
        if error_code in _MISSING_EMAIL_ERRORS:
            raise ValueError(_MISSING_EMAIL_ERRORS[error_code].format(bucket=bucket, key=key)) from e
        raise

    return response['Body'].read()


def upload_processed_result(
    bucket: str,
    key: str,
    content: str,
    content_type: str = 'application/json'
) -> None:
    """
    Upload a parsed transfer record to S3.

    Args:
        bucket: S3 bucket name
        key: S3 object key for the record
        content: Serialized record
        content_type: MIME type of content

    Raises:
        ValueError: If parameters are invalid
        ClientError: If S3 operation fails

    Example:
        >>> upload_processed_result(
        ...     bucket="transfer-records",
        ...     key="transfers/emails/abc123.json",
        ...     content='{"version": "2.0", ...}'
        ... )
    """
    if not bucket:
        raise ValueError("S3 bucket name cannot be empty")
    if not key:
        raise ValueError("S3 object key cannot be empty")
    if content is None:
        raise ValueError("Content cannot be None")

    body = content.encode('utf-8')
    try:
        s3_client.put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type
        )
        logger.info(f"Uploaded record to s3://{bucket}/{key} ({len(body)} bytes)")

    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', 'Unknown')
        logger.error(f"Failed to upload record to s3://{bucket}/{key}: error_code={error_code}")
        raise
