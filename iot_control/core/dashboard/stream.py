"""
Chuyển thay đổi của Dashboard thành luồng Server-Sent Events.
"""
import asyncio
import json
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

from .dashboard import Dashboard

logger = logging.getLogger(__name__)

def format_event(snapshot: Dict[str, Any]) -> str:
    """Một sự kiện SSE chứa snapshot dạng JSON."""
    return f"data: {json.dumps(snapshot, ensure_ascii=False)}\n\n"

async def stream_snapshots(
    dashboard: Dashboard,
    is_disconnected: Callable[[], Awaitable[bool]],
    keepalive: float = 15.0
) -> AsyncIterator[str]:
    """
    Phát snapshot hiện tại rồi mỗi thay đổi tiếp theo cho tới khi client ngắt
    hoặc dashboard bị đóng (đăng xuất, service dừng).
    
    Listener của Firebase chạy trên thread khác nên snapshot được đưa vào
    hàng đợi của event loop bằng call_soon_threadsafe.
    
    Args:
        dashboard: Dashboard cần theo dõi
        is_disconnected: Coroutine kiểm tra client đã ngắt kết nối chưa
        keepalive: Số giây giữa các comment giữ kết nối
    """
    loop = asyncio.get_running_loop()
    queue: "asyncio.Queue[Optional[Dict[str, Any]]]" = asyncio.Queue()
    
    def on_change(snapshot: Optional[Dict[str, Any]]) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, snapshot)
        
    remove = dashboard.add_observer(on_change)
    try:
        yield format_event(dashboard.snapshot())
        while dashboard.active and not await is_disconnected():
            try:
                snapshot = await asyncio.wait_for(queue.get(), timeout=keepalive)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            if snapshot is None:
                break
            yield format_event(snapshot)
    finally:
        remove()
        logger.debug(f"Dashboard stream closed for user {dashboard.uid}")
