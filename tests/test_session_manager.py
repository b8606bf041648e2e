#!/usr/bin/env python
# tests/test_session_manager.py

import os
import sys
import unittest
from unittest.mock import MagicMock

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from iot_control.core.auth import AuthUser, SessionManager
from iot_control.infrastructure.exceptions import AuthenticationError, ConnectionError


class TestSessionManager(unittest.TestCase):
    """Test cases for SessionManager."""

    def setUp(self):
        self.auth = MagicMock()
        self.redis = MagicMock()
        self.manager = SessionManager(self.auth, self.redis, key_prefix="session:", session_ttl=1800)
        self.user = AuthUser(uid="uid-123", email="user@example.com", id_token="tok", expires_in=3600)

    def test_start_stores_session_and_notifies(self):
        events = []
        self.manager.add_listener(lambda uid, user: events.append((uid, user)))

        self.manager.start(self.user)

        args, kwargs = self.redis.set.call_args
        self.assertEqual(args[0], "session:uid-123")
        self.assertEqual(args[1]["email"], "user@example.com")
        self.assertEqual(kwargs["expire"], 1800)
        self.assertEqual(events, [("uid-123", self.user)])

    def test_start_raises_when_session_not_stored(self):
        events = []
        self.manager.add_listener(lambda uid, user: events.append((uid, user)))
        self.redis.set.return_value = False

        with self.assertRaises(ConnectionError) as ctx:
            self.manager.start(self.user)

        self.assertEqual(ctx.exception.details["service"], "redis")
        self.assertEqual(events, [])

    def test_end_deletes_session_and_notifies_none(self):
        events = []
        self.manager.add_listener(lambda uid, user: events.append((uid, user)))

        self.manager.end(self.user)

        self.redis.delete.assert_called_once_with("session:uid-123")
        self.assertEqual(events, [("uid-123", None)])

    def test_failing_listener_does_not_stop_others(self):
        events = []

        def broken(uid, user):
            raise RuntimeError("boom")

        self.manager.add_listener(broken)
        self.manager.add_listener(lambda uid, user: events.append(uid))

        self.manager.start(self.user)

        self.assertEqual(events, ["uid-123"])

    def test_removed_listener_not_called(self):
        events = []
        remove = self.manager.add_listener(lambda uid, user: events.append(uid))
        remove()
        remove()

        self.manager.start(self.user)

        self.assertEqual(events, [])

    def test_sign_in_starts_session(self):
        self.auth.sign_in.return_value = self.user

        user = self.manager.sign_in("user@example.com", "secret1")

        self.assertIs(user, self.user)
        self.redis.set.assert_called_once()

    def test_sign_in_failure_starts_nothing(self):
        self.auth.sign_in.side_effect = AuthenticationError("Failed to sign in")

        with self.assertRaises(AuthenticationError):
            self.manager.sign_in("user@example.com", "secret1")

        self.redis.set.assert_not_called()

    def test_sign_out_revokes_and_ends(self):
        self.manager.sign_out(self.user)

        self.auth.sign_out.assert_called_once_with(self.user)
        self.redis.delete.assert_called_once_with("session:uid-123")

    def test_current_user_without_token(self):
        self.assertIsNone(self.manager.current_user(None))
        self.auth.verify.assert_not_called()

    def test_current_user_with_rejected_token(self):
        self.auth.verify.side_effect = AuthenticationError("revoked")
        self.assertIsNone(self.manager.current_user("tok"))

    def test_current_user_without_session(self):
        self.auth.verify.return_value = AuthUser(uid="uid-123", id_token="tok")
        self.redis.get.return_value = None

        self.assertIsNone(self.manager.current_user("tok"))
        self.redis.get.assert_called_once_with("session:uid-123")

    def test_current_user_with_session(self):
        self.auth.verify.return_value = AuthUser(uid="uid-123", id_token="tok")
        self.redis.get.return_value = {"uid": "uid-123", "email": "user@example.com"}

        user = self.manager.current_user("tok")

        self.assertEqual(user.uid, "uid-123")
        self.assertEqual(user.email, "user@example.com")

    def test_auth_state_views(self):
        self.assertEqual(
            self.manager.auth_state(None),
            {"authenticated": False, "view": "login", "user": None}
        )

        self.auth.verify.return_value = AuthUser(uid="uid-123", email="user@example.com")
        self.redis.get.return_value = {"uid": "uid-123"}

        state = self.manager.auth_state("tok")
        self.assertTrue(state["authenticated"])
        self.assertEqual(state["view"], "dashboard")
        self.assertEqual(state["user"], {"uid": "uid-123", "email": "user@example.com"})


if __name__ == "__main__":
    unittest.main()
