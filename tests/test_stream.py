#!/usr/bin/env python
# tests/test_stream.py

import os
import sys
import json
import asyncio
import unittest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from iot_control.core.auth import AuthUser
from iot_control.core.dashboard import Dashboard, stream_snapshots, format_event
from tests.mocks.firebase_mock import make_event, make_user_records


def parse_event(chunk):
    """Lấy JSON từ dòng data: của một sự kiện SSE."""
    assert chunk.startswith("data: ") and chunk.endswith("\n\n")
    return json.loads(chunk[len("data: "):])


class TestDashboardStream(unittest.TestCase):
    """Test cases for stream_snapshots."""

    def setUp(self):
        self.records = make_user_records()
        self.dashboard = Dashboard(AuthUser(uid="uid-1", email="user@example.com"), self.records)
        self.dashboard.activate()

    def test_format_event(self):
        chunk = format_event({"led": {"status": True}})
        self.assertEqual(parse_event(chunk), {"led": {"status": True}})

    def test_streams_initial_snapshot_then_changes(self):
        async def run():
            disconnected = [False]

            async def is_disconnected():
                return disconnected[0]

            stream = stream_snapshots(self.dashboard, is_disconnected, keepalive=1.0)
            first = await stream.__anext__()

            self.records.callbacks["led_status"](make_event(True))
            second = await stream.__anext__()

            disconnected[0] = True
            await stream.aclose()
            return first, second

        first, second = asyncio.run(run())

        self.assertFalse(parse_event(first)["led"]["status"])
        self.assertTrue(parse_event(second)["led"]["status"])
        # Observer của stream đã được gỡ
        self.assertEqual(self.dashboard._observers, [])

    def test_keepalive_when_idle(self):
        async def run():
            async def is_disconnected():
                return False

            stream = stream_snapshots(self.dashboard, is_disconnected, keepalive=0.01)
            await stream.__anext__()
            chunk = await stream.__anext__()
            await stream.aclose()
            return chunk

        self.assertEqual(asyncio.run(run()), ": keep-alive\n\n")

    def test_stops_when_client_disconnects(self):
        async def run():
            async def is_disconnected():
                return True

            return [chunk async for chunk in stream_snapshots(self.dashboard, is_disconnected)]

        chunks = asyncio.run(run())

        self.assertEqual(len(chunks), 1)
        self.assertEqual(parse_event(chunks[0])["user"]["uid"], "uid-1")

    def test_stops_when_dashboard_closes(self):
        async def run():
            async def is_disconnected():
                return False

            stream = stream_snapshots(self.dashboard, is_disconnected, keepalive=5.0)
            chunks = [await stream.__anext__()]
            self.dashboard.close()
            async for chunk in stream:
                chunks.append(chunk)
            return chunks

        chunks = asyncio.run(asyncio.wait_for(run(), timeout=2.0))

        self.assertEqual(len(chunks), 1)
        self.assertEqual(self.dashboard._observers, [])

    def test_closed_dashboard_ends_after_snapshot(self):
        self.dashboard.close()

        async def run():
            async def is_disconnected():
                return False

            return [chunk async for chunk in stream_snapshots(self.dashboard, is_disconnected, keepalive=0.01)]

        chunks = asyncio.run(asyncio.wait_for(run(), timeout=2.0))

        self.assertEqual(len(chunks), 1)


if __name__ == "__main__":
    unittest.main()
