from __future__ import annotations

import os
import pytest

# Set a test key for field encryption before settings are first read
os.environ.setdefault("ENCRYPTION_KEY", "test_key_for_development_only_32chars00")
os.environ.setdefault("KEY_DERIVATION_ITERATIONS", "1000")


@pytest.fixture
def sample_profile():
    """A user profile record with several kinds of PII."""
    return {
        "name": "Jane Doe",
        "bio": "Reach me at jane.doe@example.com or 555-123-4567.",
        "last_login_ip": "Logged in from 192.168.10.20",
        "tax_id": "123-45-6789",
        "age": 34,
        "verified": True,
        "skills": ["python", "contact: dev@corp.io"],
        "manager": None,
    }


@pytest.fixture
def session_salt():
    """A deterministic salt for testing."""
    return b"test_salt_32_bytes_long_exactly!!"


@pytest.fixture(scope="session")
def encryption_key():
    """A derived key for testing."""
    from shield.encryption import derive_key
    return derive_key(
        "test_key_for_development_only_32chars00",
        b"test_salt_32_bytes_long_exactly!!",
        iterations=1000,
    )


@pytest.fixture
def encryptor(encryption_key: bytes):
    from shield.encryption import FieldEncryptor
    return FieldEncryptor(encryption_key)
