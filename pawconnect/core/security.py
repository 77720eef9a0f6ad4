"""Module: security."""

import hashlib
import hmac
import os
from secrets import token_urlsafe

# Stored credential format: pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>
PASSWORD_SCHEME = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 390000
SALT_BYTES = 16


def is_password_hash(stored: str | None) -> bool:
    return bool(stored) and stored.startswith(f"{PASSWORD_SCHEME}$")


def hash_password(password: str) -> str:
    """Create a salted PBKDF2-SHA256 credential string for storage."""
    salt = os.urandom(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PASSWORD_ITERATIONS)
    return f"{PASSWORD_SCHEME}${PASSWORD_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str | None) -> bool:
    """
    Check a login password against the stored credential.

    Accounts imported from the old PawConnect database still hold plaintext
    passwords; those are compared byte-for-byte until the owner logs in and
    the credential is rehashed.
    """
    if not stored:
        return False

    if not is_password_hash(stored):
        return hmac.compare_digest(stored.encode("utf-8"), password.encode("utf-8"))

    try:
        _, iterations_raw, salt_hex, hash_hex = stored.split("$", 3)
        iterations = int(iterations_raw)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False

    computed = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(computed, expected)


def new_access_token() -> str:
    return token_urlsafe(32)
