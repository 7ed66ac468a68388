"""Credential handling.

This module provides core credential utilities including:
- Password hashing with bcrypt
- Default password derivation for admin-created accounts
- Opaque invite token generation
- Phone-number matching used by the visitor sign-in fallback

There is no session or token issuance here: sign-in endpoints only
confirm that the supplied secret matches the stored one.
"""

import secrets
from dataclasses import dataclass

from passlib.context import CryptContext

from expohub.core.constants import (
    BCRYPT_ROUNDS,
    DEFAULT_PASSWORD_SUFFIX,
    INVITE_TOKEN_BYTES,
    PHONE_SUFFIX_LENGTH,
)
from expohub.core.utils.text import digits_only


INVALID_CREDENTIALS = "Invalid email or password"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


# ============================================================
# Password Utilities
# ============================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against; ``None`` never matches

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognisable hash
        return False


def default_password(email: str | None, fallback_name: str | None = None) -> str | None:
    """Derive the initial password handed out for admin-created accounts.

    ``jane.doe@acme.com`` gives ``jane.doe@123``. Without an email the
    fallback name is used with whitespace removed and lower-cased, so
    ``Acme Expo`` gives ``acmeexpo@123``.

    Returns:
        The plaintext default, or None if there is nothing to derive from
    """
    if email:
        return f"{email.split('@')[0]}{DEFAULT_PASSWORD_SUFFIX}"
    if fallback_name:
        return f"{''.join(fallback_name.split()).lower()}{DEFAULT_PASSWORD_SUFFIX}"
    return None


@dataclass(frozen=True)
class IssuedCredential:
    """A credential ready for storage.

    Attributes:
        password_hash: Hash to persist, None when no credential could be issued
        plaintext: The derived default password. Only set when one was
            generated; it is returned once in the creation response and
            cannot be recovered afterwards.
    """

    password_hash: str | None = None
    plaintext: str | None = None

    @property
    def is_default(self) -> bool:
        return self.plaintext is not None


def issue_credential(
    password: str | None,
    email: str | None,
    fallback_name: str | None = None,
) -> IssuedCredential:
    """Hash an explicit password, or derive and hash the default one.

    Args:
        password: Password chosen by the caller, if any
        email: Account email used to derive the default
        fallback_name: Used to derive the default when there is no email

    Returns:
        IssuedCredential; empty when neither a password nor a source for
        the default was supplied
    """
    if password:
        return IssuedCredential(password_hash=hash_password(password))

    derived = default_password(email, fallback_name)
    if derived is None:
        return IssuedCredential()
    return IssuedCredential(password_hash=hash_password(derived), plaintext=derived)


# ============================================================
# Tokens
# ============================================================


def generate_invite_token() -> str:
    """Create an opaque, URL-safe, single-use invite token."""
    return secrets.token_urlsafe(INVITE_TOKEN_BYTES)


# ============================================================
# Phone matching
# ============================================================


def phone_matches(candidate: str, stored_mobile: str | None) -> bool:
    """Compare a typed phone number against the stored mobile.

    Non-digits are ignored. Numbers match when they are equal or when
    either one ends with the last ten digits of the other, so ``9848022338``
    matches ``+91 98480 22338``.
    """
    if not stored_mobile:
        return False
    typed = digits_only(candidate)
    stored = digits_only(stored_mobile)
    if not typed or not stored:
        return False
    if typed == stored:
        return True
    if len(typed) >= PHONE_SUFFIX_LENGTH and stored.endswith(typed[-PHONE_SUFFIX_LENGTH:]):
        return True
    return len(stored) >= PHONE_SUFFIX_LENGTH and typed.endswith(stored[-PHONE_SUFFIX_LENGTH:])
