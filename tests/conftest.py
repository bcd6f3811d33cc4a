"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
import pytest

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

# Set up test environment variables before importing any modules
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-east-1')
os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('LOG_LEVEL', 'INFO')


ENGLISH_SUBJECT = "INTERAC e-Transfer: A money transfer from SAMPLE TENANT has been automatically deposited."

ENGLISH_BODY = """
Hi SAMPLE LANDLORD,

SAMPLE TENANT has sent you a money transfer for the amount of $5.25 (CAD) and the money has been automatically deposited into your bank account at Sample Bank.

Message: April rent

Reference Number: CA1234abcd
"""

FRENCH_SUBJECT = "Virement INTERAC : Un virement de SAMPLE TENANT a été déposé automatiquement."

FRENCH_BODY = """
Bonjour SAMPLE LANDLORD,

SAMPLE TENANT vous a envoyé un virement de 5,25 $ (CAD) et les fonds ont été déposés automatiquement dans votre compte.

Message : Loyer d'avril

Référence : CA5678efgh
"""


@pytest.fixture
def english_subject():
    return ENGLISH_SUBJECT


@pytest.fixture
def english_body():
    return ENGLISH_BODY


@pytest.fixture
def french_subject():
    return FRENCH_SUBJECT


@pytest.fixture
def french_body():
    return FRENCH_BODY


@pytest.fixture
def english_email_content():
    """Raw INTERAC notification email in MIME format."""
    return (
        "From: INTERAC e-Transfer <notify@payments.interac.ca>\r\n"
        "To: SAMPLE LANDLORD <landlord@example.com>\r\n"
        "Reply-To: SAMPLE TENANT <tenant@example.com>\r\n"
        f"Subject: {ENGLISH_SUBJECT}\r\n"
        "Message-ID: <abc123@payments.interac.ca>\r\n"
        "Date: Mon, 01 Apr 2024 10:30:00 -0400\r\n"
        "MIME-Version: 1.0\r\n"
        "Content-Type: text/plain; charset=\"UTF-8\"\r\n"
        "\r\n"
        f"{ENGLISH_BODY}"
    ).encode('utf-8')
