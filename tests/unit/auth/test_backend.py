"""Unit tests for credential utilities."""

import pytest

from expohub.core.auth import (
    IssuedCredential,
    default_password,
    generate_invite_token,
    hash_password,
    issue_credential,
    one_time_credentials,
    phone_matches,
    verify_password,
)


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_returns_hash(self):
        """Hash should be different from plain password."""
        password = "SecurePassword123!"
        hashed = hash_password(password)

        assert hashed != password
        assert hashed.startswith("$2b$")

    def test_verify_password_correct(self):
        password = "SecurePassword123!"
        assert verify_password(password, hash_password(password)) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("SecurePassword123!")
        assert verify_password("WrongPassword", hashed) is False

    def test_missing_hash_never_matches(self):
        assert verify_password("anything", None) is False
        assert verify_password("anything", "") is False

    def test_unrecognised_hash_never_matches(self):
        """A plaintext value left in the password column is not a hash."""
        assert verify_password("owner@123", "owner@123") is False


class TestDefaultPassword:
    def test_derived_from_email_local_part(self):
        assert default_password("jane.doe@acme.com") == "jane.doe@123"

    def test_email_wins_over_name(self):
        assert default_password("owner@acme.io", "Acme Expo") == "owner@123"

    def test_falls_back_to_name(self):
        assert default_password(None, "Acme  Expo Hall") == "acmeexpohall@123"

    def test_nothing_to_derive_from(self):
        assert default_password(None, None) is None
        assert default_password("", "") is None


class TestIssueCredential:
    """Tests for issue_credential."""

    def test_explicit_password_is_hashed_and_not_returned(self):
        credential = issue_credential("Chosen#Secret1", "owner@acme.io")

        assert credential.is_default is False
        assert credential.plaintext is None
        assert verify_password("Chosen#Secret1", credential.password_hash)

    def test_default_password_is_returned_once(self):
        credential = issue_credential(None, "owner@acme.io")

        assert credential.plaintext == "owner@123"
        assert verify_password("owner@123", credential.password_hash)

    def test_empty_when_nothing_to_derive_from(self):
        assert issue_credential(None, None) == IssuedCredential()

    def test_one_time_credentials_only_for_defaults(self):
        explicit = issue_credential("Chosen#Secret1", "owner@acme.io")
        derived = issue_credential("", "owner@acme.io")

        assert one_time_credentials(explicit, "owner@acme.io") is None
        issued = one_time_credentials(derived, "owner@acme.io")
        assert issued.email == "owner@acme.io"
        assert issued.password == "owner@123"


class TestInviteToken:
    def test_tokens_are_url_safe_and_unique(self):
        tokens = {generate_invite_token() for _ in range(50)}

        assert len(tokens) == 50
        for token in tokens:
            assert len(token) >= 43
            assert "/" not in token
            assert "+" not in token


class TestPhoneMatches:
    """Tests for the visitor phone fallback."""

    @pytest.mark.parametrize(
        ("typed", "stored"),
        [
            ("9848022338", "9848022338"),
            ("9848022338", "+91 98480 22338"),
            ("+91-9848022338", "9848022338"),
            ("09848022338", "919848022338"),
        ],
    )
    def test_matches(self, typed, stored):
        assert phone_matches(typed, stored) is True

    @pytest.mark.parametrize(
        ("typed", "stored"),
        [
            ("9848022339", "9848022338"),
            ("22338", "9848022338"),
            ("not a phone", "9848022338"),
            ("9848022338", None),
            ("9848022338", ""),
        ],
    )
    def test_does_not_match(self, typed, stored):
        assert phone_matches(typed, stored) is False
