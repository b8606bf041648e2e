"""
Routes API cho đăng nhập, đăng ký và đăng xuất.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Body, Depends, Header
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from iot_control.core.auth import AuthUser, RegistrationService, SessionManager
from iot_control.infrastructure.dependencies import (
    handle_exceptions,
    get_bearer_token,
    get_current_user,
    get_registration_service,
    get_session_manager
)

# Khởi tạo logger
logger = logging.getLogger(__name__)

# Tạo router
router = APIRouter()

# Các lời gọi Firebase và Redis là blocking nên chạy trong threadpool

# Trường trống được kiểm tra trong AuthService để trả đúng thông điệp
class Credentials(BaseModel):
    email: str = Field("", description="Email đăng nhập")
    password: str = Field("", description="Mật khẩu")

@router.post("/login", summary="Đăng nhập")
@handle_exceptions
async def login(
    credentials: Credentials = Body(...),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Đăng nhập bằng email và mật khẩu.
    
    Thành công thì mở phiên và trả về ID token để gửi trong header
    `Authorization: Bearer <token>`.
    """
    user = await run_in_threadpool(manager.sign_in, credentials.email, credentials.password)
    return {
        "success": True,
        "message": "Signed in",
        "view": "dashboard",
        "user": user.public(),
        "id_token": user.id_token,
        "refresh_token": user.refresh_token,
        "expires_in": user.expires_in
    }

@router.post("/signup", summary="Đăng ký tài khoản")
@handle_exceptions
async def signup(
    credentials: Credentials = Body(...),
    registration: RegistrationService = Depends(get_registration_service)
):
    """
    Tạo tài khoản, khởi tạo dữ liệu mặc định rồi đăng xuất.
    
    Người dùng cần đăng nhập lại sau khi đăng ký.
    """
    result = await run_in_threadpool(registration.register, credentials.email, credentials.password)
    result["view"] = "login"
    return result

@router.post("/logout", summary="Đăng xuất")
@handle_exceptions
async def logout(
    user: AuthUser = Depends(get_current_user),
    manager: SessionManager = Depends(get_session_manager)
):
    """Thu hồi token và đóng phiên của người dùng hiện tại."""
    await run_in_threadpool(manager.sign_out, user)
    return {
        "success": True,
        "message": "Signed out",
        "view": "login"
    }

@router.get("/state", summary="Trạng thái xác thực")
@handle_exceptions
async def auth_state(
    authorization: Optional[str] = Header(None),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Cho biết client nên hiển thị màn hình đăng nhập hay bảng điều khiển.
    """
    return await run_in_threadpool(manager.auth_state, get_bearer_token(authorization))

@router.get("/me", summary="Người dùng hiện tại")
async def current_user(user: AuthUser = Depends(get_current_user)):
    """Lấy uid và email của người dùng đang đăng nhập."""
    return user.public()
