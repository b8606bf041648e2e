#!/usr/bin/env python
# tests/test_auth_service.py

import os
import sys
import unittest
from unittest.mock import MagicMock

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from iot_control.core.auth import (
    AuthService,
    AuthUser,
    validate_credentials,
    EMPTY_EMAIL_MESSAGE,
    EMPTY_PASSWORD_MESSAGE,
    SHORT_PASSWORD_MESSAGE
)
from iot_control.infrastructure.exceptions import AuthenticationError, ValidationError
from tests.mocks.auth_mock import SIGN_IN_RESPONSE, SIGN_UP_RESPONSE, CLAIMS


class TestValidateCredentials(unittest.TestCase):
    """Kiểm tra các trường nhập trước khi gọi nhà cung cấp."""

    def test_trims_values(self):
        email, password = validate_credentials("  user@example.com ", " secret1 ")
        self.assertEqual(email, "user@example.com")
        self.assertEqual(password, "secret1")

    def test_empty_email(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_credentials("   ", "secret1")
        self.assertEqual(ctx.exception.message, EMPTY_EMAIL_MESSAGE)
        self.assertEqual(ctx.exception.details["field"], "email")

    def test_empty_password(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_credentials("user@example.com", "")
        self.assertEqual(ctx.exception.message, EMPTY_PASSWORD_MESSAGE)

    def test_none_values(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_credentials(None, None)
        self.assertEqual(ctx.exception.message, EMPTY_EMAIL_MESSAGE)

    def test_short_password_only_checked_on_request(self):
        validate_credentials("user@example.com", "abc")
        with self.assertRaises(ValidationError) as ctx:
            validate_credentials("user@example.com", " abc  ", check_length=True)
        self.assertEqual(ctx.exception.message, SHORT_PASSWORD_MESSAGE)
        self.assertEqual(SHORT_PASSWORD_MESSAGE, "Password must be at least 6 characters")


class TestAuthService(unittest.TestCase):
    """Test cases for AuthService."""

    def setUp(self):
        self.client = MagicMock()
        self.service = AuthService(self.client)

    def test_sign_in_returns_user(self):
        self.client.sign_in_with_password.return_value = SIGN_IN_RESPONSE

        user = self.service.sign_in(" user@example.com ", "secret1")

        self.client.sign_in_with_password.assert_called_once_with("user@example.com", "secret1")
        self.assertIsInstance(user, AuthUser)
        self.assertEqual(user.uid, "uid-123")
        self.assertEqual(user.id_token, "id-token-abc")
        self.assertEqual(user.expires_in, 3600)

    def test_sign_in_validation_skips_provider(self):
        with self.assertRaises(ValidationError):
            self.service.sign_in("", "secret1")
        self.client.sign_in_with_password.assert_not_called()

    def test_sign_in_provider_error_propagates(self):
        self.client.sign_in_with_password.side_effect = AuthenticationError("Wrong password")

        with self.assertRaises(AuthenticationError) as ctx:
            self.service.sign_in("user@example.com", "secret1")

        self.assertEqual(ctx.exception.message, "Wrong password")

    def test_sign_up_short_password_skips_provider(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.sign_up("new@example.com", "12345")
        self.assertEqual(ctx.exception.message, SHORT_PASSWORD_MESSAGE)
        self.client.sign_up.assert_not_called()

    def test_sign_up_returns_user(self):
        self.client.sign_up.return_value = SIGN_UP_RESPONSE

        user = self.service.sign_up("new@example.com", "123456")

        self.assertEqual(user.uid, "uid-new")
        self.assertEqual(user.email, "new@example.com")

    def test_sign_out_revokes_tokens(self):
        self.service.sign_out(AuthUser(uid="uid-123"))
        self.client.revoke_refresh_tokens.assert_called_once_with("uid-123")

    def test_verify_builds_user_from_claims(self):
        self.client.verify_id_token.return_value = CLAIMS

        user = self.service.verify("id-token-abc")

        self.assertEqual(user.uid, "uid-123")
        self.assertEqual(user.email, "user@example.com")
        self.assertEqual(user.id_token, "id-token-abc")


if __name__ == "__main__":
    unittest.main()
