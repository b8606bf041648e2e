#!/usr/bin/env python
# tests/test_infrastructure.py

import os
import sys
import asyncio
import unittest
from unittest.mock import patch, MagicMock

from fastapi import HTTPException

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from iot_control.infrastructure.config import ConfigLoader
from iot_control.infrastructure.database import FirebaseClient, RedisClient
from iot_control.infrastructure.dependencies import get_bearer_token, handle_exceptions
from iot_control.infrastructure.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    DataAccessError,
    ValidationError,
    service_exception_handler
)
from iot_control.infrastructure.factory import ServiceFactory


class TestExceptions(unittest.TestCase):
    """Ánh xạ service exception sang HTTP status."""

    def test_status_codes(self):
        cases = [
            (ValidationError("bad"), 400),
            (AuthenticationError("no"), 401),
            (ConnectionError("down", service_name="redis"), 503),
            (DataAccessError("denied", source="firebase"), 500),
            (ConfigurationError("missing"), 500),
        ]
        for exc, expected in cases:
            self.assertEqual(service_exception_handler(exc).status_code, expected)

    def test_detail_keeps_message(self):
        http_exc = service_exception_handler(AuthenticationError("Wrong password", provider_code="INVALID_PASSWORD"))
        self.assertEqual(http_exc.detail["message"], "Wrong password")
        self.assertEqual(http_exc.detail["details"], {"provider_code": "INVALID_PASSWORD"})

    def test_handle_exceptions(self):
        @handle_exceptions
        async def failing():
            raise ValidationError("Please enter your email", field="email")

        @handle_exceptions
        async def crashing():
            raise RuntimeError("boom")

        with self.assertRaises(HTTPException) as ctx:
            asyncio.run(failing())
        self.assertEqual(ctx.exception.status_code, 400)

        with self.assertRaises(HTTPException) as ctx:
            asyncio.run(crashing())
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(failing.__name__, "failing")

    def test_bearer_token(self):
        self.assertEqual(get_bearer_token("Bearer abc"), "abc")
        self.assertEqual(get_bearer_token("bearer  abc "), "abc")
        self.assertIsNone(get_bearer_token("Basic abc"))
        self.assertIsNone(get_bearer_token("Bearer "))
        self.assertIsNone(get_bearer_token(None))


class TestConfigLoader(unittest.TestCase):
    """Test cases for ConfigLoader."""

    def setUp(self):
        self.config = ConfigLoader(load_env=False)

    def test_dotted_get(self):
        self.assertEqual(self.config.get("firebase.paths.user"), "users/{uid}")
        self.assertEqual(self.config.get("redis.key_prefixes.session"), "session:")
        self.assertIsNone(self.config.get("firebase.nope"))
        self.assertEqual(self.config.get("", "x"), "x")

    def test_get_path(self):
        self.assertEqual(self.config.get_path("led_status", "abc"), "users/abc/controls/led_status")

    @patch.dict(os.environ, {"FIREBASE_WEB_API_KEY": "key-1"})
    def test_web_api_key(self):
        self.assertEqual(self.config.get_firebase_web_api_key(), "key-1")


class TestFirebaseClient(unittest.TestCase):
    """Test cases for FirebaseClient."""

    def setUp(self):
        self.apps_patcher = patch("firebase_admin._apps", {"[DEFAULT]": MagicMock()})
        self.apps_patcher.start()
        self.reference_patcher = patch("iot_control.infrastructure.database.firebase_client.db.reference")
        self.mock_reference = self.reference_patcher.start()
        self.ref = self.mock_reference.return_value

    def tearDown(self):
        self.reference_patcher.stop()
        self.apps_patcher.stop()

    def test_requires_initialized_app(self):
        with patch("firebase_admin._apps", {}):
            with self.assertRaises(RuntimeError):
                FirebaseClient()

    def test_base_path(self):
        client = FirebaseClient("users")
        client.set("abc/controls/led_status", True)

        self.mock_reference.assert_called_once_with("users/abc/controls/led_status")
        self.ref.set.assert_called_once_with(True)

    def test_get_default(self):
        self.ref.get.return_value = None
        self.assertEqual(FirebaseClient().get("users/abc", default={}), {})

    def test_errors_are_wrapped(self):
        self.ref.get.side_effect = ValueError("Permission denied")

        with self.assertRaises(DataAccessError) as ctx:
            FirebaseClient().get("users/abc")

        self.assertEqual(ctx.exception.message, "Permission denied")
        self.assertEqual(ctx.exception.details["path"], "users/abc")

    def test_listen(self):
        callback = MagicMock()
        registration = FirebaseClient().listen("users/abc/sensor_data", callback)

        self.ref.listen.assert_called_once_with(callback)
        self.assertIs(registration, self.ref.listen.return_value)


class TestRedisClient(unittest.TestCase):
    """Test cases for RedisClient."""

    @patch("iot_control.infrastructure.database.redis_client.redis.Redis")
    def test_json_round_trip(self, mock_redis):
        connection = mock_redis.return_value
        client = RedisClient("localhost", 6379)

        client.set("session:abc", {"uid": "abc"}, expire=60)
        connection.set.assert_called_once_with("session:abc", '{"uid": "abc"}', ex=60)

        connection.get.return_value = '{"uid": "abc"}'
        self.assertEqual(client.get("session:abc"), {"uid": "abc"})

        connection.get.return_value = None
        self.assertEqual(client.get("session:missing", default="none"), "none")


class TestServiceFactory(unittest.TestCase):
    """Test cases for ServiceFactory."""

    def setUp(self):
        ServiceFactory.reset()

    def tearDown(self):
        ServiceFactory.reset()

    def test_singleton(self):
        self.assertIs(ServiceFactory(), ServiceFactory())

    @patch.dict(os.environ, {"FIREBASE_WEB_API_KEY": ""})
    def test_auth_client_requires_api_key(self):
        with self.assertRaises(ConfigurationError):
            ServiceFactory().create_auth_client()

    def test_session_manager_closes_dashboards_on_sign_out(self):
        factory = ServiceFactory()
        registry = MagicMock()
        factory.services.update({
            "auth_service": MagicMock(),
            "redis_client": MagicMock(),
            "dashboard_registry": registry
        })

        manager = factory.create_session_manager()
        user = MagicMock(uid="uid-1")
        manager.end(user)

        registry.on_auth_state_changed.assert_called_once_with("uid-1", None)


if __name__ == "__main__":
    unittest.main()
