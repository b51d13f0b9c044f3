from functools import lru_cache

from config import get_settings
from shield.encryption import FieldEncryptor


@lru_cache
def _build_encryptor(secret: str, salt: str, iterations: int) -> FieldEncryptor:
    return FieldEncryptor.from_secret(secret, salt.encode("utf-8"), iterations)


def get_encryptor() -> FieldEncryptor:
    """Return the process-wide encryptor, deriving its key on first use.

    Raises ``EncryptionConfigError`` when ``ENCRYPTION_KEY`` is not set.
    """
    settings = get_settings()
    return _build_encryptor(
        settings.encryption_key,
        settings.encryption_salt,
        settings.key_derivation_iterations,
    )
