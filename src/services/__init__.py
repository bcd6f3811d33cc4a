"""
I/O services for the transfer pipeline.

This package contains the email decoder feeding the INTERAC parser and
the S3 functions used to read raw emails and store parsed records.
"""

__all__ = ['email', 's3']
