"""
Routes API cho bảng điều khiển cảm biến và LED.
"""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse

from iot_control.core.auth import AuthUser
from iot_control.core.dashboard import DashboardRegistry, stream_snapshots
from iot_control.infrastructure.dependencies import (
    handle_exceptions,
    get_current_user,
    get_dashboard_registry
)

# Khởi tạo logger
logger = logging.getLogger(__name__)

# Tạo router
router = APIRouter()

@router.get("", summary="Lấy trạng thái bảng điều khiển")
@handle_exceptions
async def get_dashboard(
    user: AuthUser = Depends(get_current_user),
    registry: DashboardRegistry = Depends(get_dashboard_registry)
):
    """
    Lấy nhiệt độ, độ ẩm và trạng thái LED đang hiển thị.
    
    Lần gọi đầu tiên sẽ bật listener realtime cho người dùng.
    """
    dashboard = await run_in_threadpool(registry.get_or_create, user)
    return dashboard.snapshot()

@router.get("/sensors", summary="Đọc dữ liệu cảm biến")
@handle_exceptions
async def get_sensor_data(
    user: AuthUser = Depends(get_current_user),
    registry: DashboardRegistry = Depends(get_dashboard_registry)
):
    """Đọc trực tiếp nhánh sensor_data từ database (không qua listener)."""
    readings = await run_in_threadpool(registry.user_records.get_sensor_data, user.uid)
    return {
        "temperature": readings.temperature,
        "humidity": readings.humidity,
        "last_updated": readings.last_updated
    }

@router.post("/led/toggle", summary="Bật/tắt LED")
@handle_exceptions
async def toggle_led(
    user: AuthUser = Depends(get_current_user),
    registry: DashboardRegistry = Depends(get_dashboard_registry)
):
    """
    Ghi giá trị ngược với trạng thái LED đang hiển thị.
    
    Trạng thái trong snapshot chỉ đổi khi database phát lại giá trị mới.
    """
    dashboard = await run_in_threadpool(registry.get_or_create, user)
    written = await run_in_threadpool(dashboard.toggle_led)
    return {
        "success": True,
        "led_status": written,
        "dashboard": dashboard.snapshot()
    }

@router.get("/stream", summary="Luồng cập nhật realtime")
@handle_exceptions
async def stream_dashboard(
    request: Request,
    user: AuthUser = Depends(get_current_user),
    registry: DashboardRegistry = Depends(get_dashboard_registry)
):
    """
    Server-Sent Events: mỗi thay đổi cảm biến hoặc LED là một sự kiện
    `data:` chứa snapshot JSON.
    """
    dashboard = await run_in_threadpool(registry.get_or_create, user)
    return StreamingResponse(
        stream_snapshots(dashboard, request.is_disconnected),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"}
    )
